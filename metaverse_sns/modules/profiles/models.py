# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- username: text (not null) - display name, unique by convention only
- bio: text (nullable)
- avatar_url: text (nullable) - public URL in the avatar-images bucket
- updated_at: timestamp (nullable)

One row per auth identity, inserted at sign-up. Row-level security
restricts writes to the owning identity; the service still filters by id.
"""
