# Supabase table: costume_progress
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id on delete cascade, not null)
- character_name: text (not null)
- series: text (nullable)
- status: text (not null, default: 'planning') - planning, in_progress, completed
- completion_percentage: integer (not null, default: 0, check 0..100)
- todos: text[] (not null, default: '{}')
- notes: text (nullable)
- image_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
