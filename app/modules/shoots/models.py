# Supabase tables: shoots, shoot_references, shoot_participants,
#                  shoot_equipment, shoot_props, shoot_costumes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Bulk association replacement runs in app/database/sql/replace_shoot_associations.sql

"""
Expected Supabase table structure:

shoots:
- id: uuid (primary key)
- team_id: uuid (foreign key to teams.id on delete cascade, not null)
- user_id: uuid (creator, not null) - informational, access is by team role
- title: text (not null)
- status: text (not null, default: 'idea') - values: idea, planning, scheduled, completed
- date: timestamptz (nullable)
- time: text (nullable) - "HH:MM"
- duration_minutes: integer (nullable)
- location_id: uuid (foreign key to locations.id on delete set null, nullable)
- location_notes: text (nullable)
- description: text (nullable)
- color: text (nullable)
- instagram_links: text[] (not null, default: '{}')
- is_public: boolean (not null, default: false)
- reminder_time: text (nullable)
- calendar_event_id: text (nullable)
- calendar_event_url: text (nullable)
- docs_id: text (nullable)
- docs_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

shoot_references:
- id: uuid (primary key)
- shoot_id: uuid (foreign key to shoots.id on delete cascade, not null)
- type: text (not null) - image, link, instagram
- url: text (not null)
- notes: text (nullable)
- created_at: timestamp (default: now())

shoot_participants:
- id: uuid (primary key)
- shoot_id: uuid (foreign key to shoots.id on delete cascade, not null)
- personnel_id: uuid (foreign key to personnel.id on delete set null, nullable)
  null means a manual participant entered as free text
- name: text (not null)
- role: text (not null)
- email: text (nullable)
- created_at: timestamp (default: now())

shoot_equipment:
- id: uuid (primary key)
- shoot_id: uuid (foreign key to shoots.id on delete cascade, not null)
- equipment_id: uuid (foreign key to equipment.id on delete cascade, not null)
- quantity: integer (not null, default: 1)

shoot_props:
- id: uuid (primary key)
- shoot_id: uuid (foreign key to shoots.id on delete cascade, not null)
- prop_id: uuid (foreign key to props.id on delete cascade, not null)

shoot_costumes:
- id: uuid (primary key)
- shoot_id: uuid (foreign key to shoots.id on delete cascade, not null)
- costume_id: uuid (foreign key to costume_progress.id on delete cascade, not null)

No unique constraint on (shoot_id, <resource>_id): duplicate ids submitted
to the resources endpoint produce duplicate join rows.
"""
