# Supabase tables: teams, team_members, team_invites
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

teams:
- id: uuid (primary key)
- name: text (not null)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

team_members:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id on delete cascade, not null)
- user_id: uuid (foreign key to auth.users.id, not null)
- role: text (not null, default: 'member') - values: owner, admin, member
- created_at: timestamp (default: now())
- unique constraint on (team_id, user_id)

team_invites:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id on delete cascade, not null)
- invite_code: text (unique, not null)
- created_by: uuid (foreign key to auth.users.id, not null)
- created_at: timestamp (default: now())

Every team-scoped table (personnel, equipment, locations, props,
costume_progress, shoots) references teams.id with on delete cascade.
"""
