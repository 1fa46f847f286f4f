"""Infrastructure modules for the notes API.

- Database: Supabase client singleton and repository pattern
- Auth: Supabase JWT authentication
- Rate Limiting: daily AI regeneration limit
"""
