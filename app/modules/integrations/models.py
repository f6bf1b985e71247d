# Integrations store no tables of their own.
# Calendar and Docs results are written back to shoots.calendar_event_id / calendar_event_url
# and shoots.docs_id / docs_url (see app/modules/shoots/models.py).

"""
External collaborators and the settings that enable them:

- Google Calendar: GOOGLE_SERVICE_ACCOUNT (JSON), GOOGLE_CALENDAR_ID
- Google Docs: GOOGLE_SERVICE_ACCOUNT (JSON)
- Google Places: GOOGLE_MAPS_API_KEY
- Resend email: RESEND_API_KEY, RESEND_FROM_EMAIL
- Uploads: AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, S3_BUCKET_NAME, or the
  Supabase Storage bucket SUPABASE_STORAGE_BUCKET

An integration without its settings answers 503; a provider failure answers 502.
"""
