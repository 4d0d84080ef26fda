# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - Account creation (auth.users table)
# - Credential exchange and session issuance
# - Session validation and revocation

"""
Supabase Auth provides:
- auth.sign_up() - Create an identity
- auth.sign_in_with_password() - Exchange credentials for a session
- auth.set_session() / auth.get_session() - Validate a stored session
- auth.sign_out() - Revoke the session
- auth.on_auth_state_change() - Subscribe to SIGNED_IN / SIGNED_OUT events

The public profile of an identity lives in the profiles table and is
created right after sign-up (see modules/profiles/models.py).
"""
