# Supabase table: personnel
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id on delete cascade, not null)
- name: text (not null)
- email: text (nullable)
- phone: text (nullable)
- role: text (nullable) - e.g. photographer, cosplayer, assistant
- instagram: text (nullable)
- notes: text (nullable)
- avatar_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
