# Supabase tables: profiles, cars, verification_requests
# This file documents the expected database schema
# Rows are created by the marketplace app; the dashboard only reads, updates and deletes them

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (not null)
- full_name, avatar_url, phone, address: text (nullable)
- is_verified: boolean (default: false)
- verification_doc_url: text (nullable)
- verification_status: text (nullable) - 'approved' once verified
- verified_at: timestamp (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

cars:
- id: uuid (primary key)
- user_id: uuid (references profiles.id)
- brand, model, fuel_type, transmission, condition, location: text
- year: integer, price: numeric, mileage: integer (nullable), engine_capacity: integer (nullable)
- body_type, assembly, color, registered_in, description: text (nullable)
- owner_name, owner_phone, owner_email: text
- images: text[] (ordered image URLs)
- features: text[] (nullable)
- is_sold, is_featured, is_verified: boolean
- views: integer (nullable, treated as 0)
- created_at, updated_at: timestamp

verification_requests:
- id: uuid (primary key)
- user_id: uuid (references profiles.id)
- document_type: text
- front_image_url, back_image_url: text
- status: text ('pending' | 'approved' | 'rejected')
- admin_note: text (nullable) - rejection reason
- created_at, updated_at: timestamp

Deleting a user removes cars and verification_requests before the profile row.
"""
