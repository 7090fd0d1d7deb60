#!/usr/bin/env python3
"""Supabase database setup script for The Vault.

This script outputs the SQL needed to create all required tables and the
media bucket in Supabase. Copy the SQL output and run it in the Supabase SQL
Editor.

Usage:
    # Print all SQL to console
    python scripts/setup_supabase.py

    # Print SQL and save to file
    python scripts/setup_supabase.py --output setup.sql

    # Verify tables exist
    python scripts/setup_supabase.py --verify

Tables Created:
    - components: component metadata and preview media URLs
    - component_content: html/css/js/external scripts, one row per component
    - tags: unique tag names
    - component_tags: component <-> tag links
    - categories: optional authored categories
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime

from vault.store.base import REQUIRED_TABLES

# =============================================================================
# SQL Schema Definitions
# =============================================================================

SCHEMA_SQL = """
-- =============================================================================
-- The Vault Database Schema for Supabase
-- =============================================================================
-- Generated: {generated_at}
--
-- Instructions:
-- 1. Open your Supabase project dashboard
-- 2. Go to SQL Editor
-- 3. Paste this entire script
-- 4. Click "Run" to execute
-- =============================================================================

-- Enable UUID extension (should already be enabled in Supabase)
CREATE EXTENSION IF NOT EXISTS "uuid-ossp";

-- =============================================================================
-- Table: components
-- =============================================================================
-- One row per dynamic component. Ids are UUIDs for components created through
-- the API, or the registry id for edited registry components.
-- =============================================================================

CREATE TABLE IF NOT EXISTS components (
    id TEXT PRIMARY KEY,
    slug TEXT NOT NULL UNIQUE,

    -- Descriptive
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    category TEXT NOT NULL,
    author TEXT DEFAULT '',
    date TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    featured BOOLEAN DEFAULT false,

    -- Media
    preview_image TEXT,
    preview_video TEXT,
    media_type TEXT DEFAULT 'unknown',

    -- Documentation
    implementation TEXT DEFAULT '',
    more_information TEXT DEFAULT '',
    external_source_url TEXT DEFAULT '',
    dependencies TEXT[] DEFAULT '{{}}',
    demo_url TEXT DEFAULT '',
    github_url TEXT DEFAULT '',
    code_snippet TEXT DEFAULT '',

    -- Timestamps
    created_at TIMESTAMPTZ DEFAULT NOW(),
    updated_at TIMESTAMPTZ DEFAULT NOW(),

    -- Constraints
    CONSTRAINT components_title_not_empty CHECK (title <> ''),
    CONSTRAINT components_category_not_empty CHECK (category <> ''),
    CONSTRAINT components_media_type_valid CHECK (media_type IN ('image', 'video', 'unknown'))
);

CREATE INDEX IF NOT EXISTS idx_components_date ON components(date DESC);
CREATE INDEX IF NOT EXISTS idx_components_category ON components(lower(category));
CREATE INDEX IF NOT EXISTS idx_components_featured ON components(featured) WHERE featured = true;

-- =============================================================================
-- Table: component_content
-- =============================================================================
-- Code payload, one row per component. Deleted before its component.
-- =============================================================================

CREATE TABLE IF NOT EXISTS component_content (
    component_id TEXT PRIMARY KEY REFERENCES components(id),
    html TEXT NOT NULL DEFAULT '',
    css TEXT NOT NULL DEFAULT '',
    js TEXT NOT NULL DEFAULT '',
    external_scripts TEXT NOT NULL DEFAULT ''
);

-- =============================================================================
-- Tables: tags, component_tags
-- =============================================================================
-- Tags are created on first use and never deleted.
-- =============================================================================

CREATE TABLE IF NOT EXISTS tags (
    id UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
    name TEXT NOT NULL UNIQUE,
    created_at TIMESTAMPTZ DEFAULT NOW(),
    CONSTRAINT tags_name_lowercase CHECK (name = lower(name) AND name <> '')
);

CREATE TABLE IF NOT EXISTS component_tags (
    component_id TEXT NOT NULL REFERENCES components(id),
    tag_id UUID NOT NULL REFERENCES tags(id),
    PRIMARY KEY (component_id, tag_id)
);

CREATE INDEX IF NOT EXISTS idx_component_tags_tag_id ON component_tags(tag_id);

-- =============================================================================
-- Table: categories
-- =============================================================================
-- Optional authored categories. When empty, categories are derived from
-- components.category.
-- =============================================================================

CREATE TABLE IF NOT EXISTS categories (
    id UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
    name TEXT NOT NULL UNIQUE,
    slug TEXT NOT NULL UNIQUE,
    description TEXT DEFAULT '',
    created_at TIMESTAMPTZ DEFAULT NOW()
);

-- =============================================================================
-- Trigger: keep components.updated_at current
-- =============================================================================

CREATE OR REPLACE FUNCTION update_updated_at_column()
RETURNS TRIGGER AS $$
BEGIN
    NEW.updated_at = NOW();
    RETURN NEW;
END;
$$ LANGUAGE plpgsql;

DROP TRIGGER IF EXISTS update_components_updated_at ON components;
CREATE TRIGGER update_components_updated_at
    BEFORE UPDATE ON components
    FOR EACH ROW
    EXECUTE FUNCTION update_updated_at_column();

-- =============================================================================
-- Storage bucket: {bucket}
-- =============================================================================

INSERT INTO storage.buckets (id, name, public)
VALUES ('{bucket}', '{bucket}', true)
ON CONFLICT (id) DO NOTHING;
"""


# =============================================================================
# Drop Tables SQL (use with caution!)
# =============================================================================

DROP_TABLES_SQL = """
-- =============================================================================
-- DROP ALL TABLES (USE WITH EXTREME CAUTION!)
-- =============================================================================
-- This will delete ALL data. Only use for complete reset during development.
-- =============================================================================

-- Drop tables in correct order (respecting foreign key constraints)
DROP TABLE IF EXISTS component_tags CASCADE;
DROP TABLE IF EXISTS component_content CASCADE;
DROP TABLE IF EXISTS tags CASCADE;
DROP TABLE IF EXISTS categories CASCADE;
DROP TABLE IF EXISTS components CASCADE;

-- Drop functions
DROP FUNCTION IF EXISTS update_updated_at_column() CASCADE;
"""


# =============================================================================
# Verification Functions
# =============================================================================

def verify_tables(client, tables=REQUIRED_TABLES) -> dict:
    """Verify that all required tables exist in Supabase.

    Args:
        client: Supabase client.
        tables: Table names to probe.

    Returns:
        Dictionary with verification results.
    """
    results = {
        'success': True,
        'tables': {},
        'missing': [],
        'errors': [],
    }

    for table in tables:
        try:
            response = client.table(table).select('*').limit(1).execute()
            results['tables'][table] = {
                'exists': True,
                'accessible': True,
                'row_count': len(response.data) if response.data else 0,
            }
        except Exception as e:
            error_str = str(e)
            if 'does not exist' in error_str.lower() or 'relation' in error_str.lower():
                results['tables'][table] = {
                    'exists': False,
                    'accessible': False,
                }
                results['missing'].append(table)
            else:
                results['tables'][table] = {
                    'exists': 'unknown',
                    'accessible': False,
                    'error': error_str[:100],
                }
                results['errors'].append(f"{table}: {error_str[:100]}")
            results['success'] = False

    return results


def print_verification_results(results: dict) -> None:
    """Print verification results in a formatted way."""
    print("\n" + "=" * 70)
    print("Supabase Table Verification Results")
    print("=" * 70)

    if 'error' in results:
        print(f"\nError: {results['error']}")
        return

    print(f"\nOverall Status: {'PASS' if results['success'] else 'FAIL'}")
    print("-" * 70)

    print("\nTable Status:")
    for table, info in results.get('tables', {}).items():
        status = "OK" if info.get('exists') is True and info.get('accessible') else "MISSING"
        icon = "[+]" if status == "OK" else "[-]"
        print(f"  {icon} {table}: {status}")
        if info.get('error'):
            print(f"      Error: {info['error']}")

    if results.get('missing'):
        print(f"\nMissing Tables: {', '.join(results['missing'])}")
        print("\nRun this script without --verify to get the SQL to create missing tables.")

    if results.get('errors'):
        print("\nErrors:")
        for error in results['errors']:
            print(f"  - {error}")

    print("\n" + "=" * 70)


# =============================================================================
# Main Functions
# =============================================================================

def get_setup_sql(bucket: str = "component-media") -> str:
    """Get the complete setup SQL with timestamp."""
    return SCHEMA_SQL.format(
        generated_at=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        bucket=bucket,
    )


def get_drop_sql() -> str:
    """Get the SQL to drop all tables (use with caution!)."""
    return DROP_TABLES_SQL


def get_sql(sql_type: str = 'setup', bucket: str = "component-media") -> str:
    if sql_type == 'drop':
        return get_drop_sql()
    return get_setup_sql(bucket)


def main():
    """Main entry point for the setup script."""
    parser = argparse.ArgumentParser(
        description='Generate Supabase setup SQL for The Vault',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Print setup SQL to console
    python scripts/setup_supabase.py

    # Save setup SQL to file
    python scripts/setup_supabase.py --output setup.sql

    # Verify tables exist in Supabase
    python scripts/setup_supabase.py --verify

    # Print drop SQL (use with caution!)
    python scripts/setup_supabase.py --type drop
        """
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Save SQL to file instead of printing'
    )

    parser.add_argument(
        '--type', '-t',
        type=str,
        choices=['setup', 'drop'],
        default='setup',
        help='Type of SQL to generate (default: setup)'
    )

    parser.add_argument(
        '--verify', '-v',
        action='store_true',
        help='Verify that tables exist in Supabase'
    )

    args = parser.parse_args()

    from vault.config.settings import get_settings

    settings = get_settings()

    if args.verify:
        if not settings.supabase_configured:
            print_verification_results(
                {'success': False, 'error': 'SUPABASE_URL and SUPABASE_KEY must be set'}
            )
            sys.exit(1)

        from supabase import create_client

        client = create_client(
            settings.supabase_url,
            settings.supabase_key.get_secret_value(),
        )
        results = verify_tables(client)
        print_verification_results(results)
        sys.exit(0 if results.get('success') else 1)

    sql = get_sql(args.type, settings.storage_bucket)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(sql)
        print(f"SQL saved to: {args.output}")
        return

    if args.type == 'drop':
        print("\n" + "!" * 70)
        print("WARNING: This will DELETE ALL DATA!")
        print("!" * 70 + "\n")
    print(sql)


if __name__ == '__main__':
    main()
