"""
auth — User authentication module.

Provides:
  • Signed bearer token creation & verification
  • Password hashing (bcrypt, 12 rounds)
  • ``get_token_payload`` / ``get_current_user_id`` FastAPI dependencies
"""
