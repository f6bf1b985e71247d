# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User sign-in and session management (done client-side)
# - JWT token generation and validation

"""
The API accepts the Supabase access token either as a Bearer token or as
the httpOnly `sb-access-token` cookie set by POST /api/auth/session.
auth.get_user() validates it and yields the user id every other module
is keyed on. Profile and team data live in user_profiles / team_members.
"""
