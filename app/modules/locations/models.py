# Supabase table: locations
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id on delete cascade, not null)
- name: text (not null)
- address: text (nullable)
- place_id: text (nullable) - Google Places id from autocomplete
- latitude: double precision (nullable)
- longitude: double precision (nullable)
- notes: text (nullable)
- image_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

shoots.location_id references locations.id on delete set null.
"""
