# Supabase table: equipment
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id on delete cascade, not null)
- name: text (not null)
- category: text (nullable) - camera, lens, lighting, ...
- description: text (nullable)
- quantity: integer (not null, default: 1)
- available: boolean (not null, default: true)
- image_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
