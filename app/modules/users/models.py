# Supabase table: user_profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

user_profiles:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (unique, not null, references auth.users.id)
- first_name: text (nullable)
- last_name: text (nullable)
- avatar_url: text (nullable)
- active_team_id: uuid (nullable, references teams.id on delete set null)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

active_team_id is a cached pointer, not ownership: it is re-validated
against team_members on every resolution.
"""
