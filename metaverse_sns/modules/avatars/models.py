# Supabase table: avatars
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

avatars:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (not null, references auth.users.id)
- name: text (not null)
- platform: text (not null)
- description: text (nullable)
- image_url: text (nullable) - public URL in the avatar-images bucket
- is_primary: boolean (default: false)
- created_at: timestamp (default: now())

A user's first avatar is created with is_primary = true. Promoting another
avatar does not clear the flag on the previous one.
"""
