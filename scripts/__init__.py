"""
Utility Scripts.

This package contains operational scripts:

- setup_supabase.py: Print or verify the Supabase schema
- migrate_custom_components.py: Move custom components into the dynamic store

Run scripts with: python -m scripts.<script_name>
"""
