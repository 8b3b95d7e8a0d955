#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify every external dependency is reachable.
Usage: python scripts/test_connections.py
"""
import sys
sys.path.insert(0, '.')

from udyog_saathi.core.config import get_settings
from udyog_saathi.db.mongodb import test_mongo_connection
from udyog_saathi.services.career_advisor import get_career_advisor
from udyog_saathi.services.image_upload import test_cloudinary_connection


def main():
    settings = get_settings()
    print("=" * 50)
    print("UDYOG SAATHI - CONNECTION TEST")
    print("=" * 50)

    print("\n[1] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if test_mongo_connection():
        print("    ✅ MongoDB: CONNECTED")
    else:
        print("    ❌ MongoDB: FAILED")

    print("\n[2] Testing AI provider...")
    if settings.ai_api_key:
        print(f"    Base URL: {settings.ai_base_url}")
        if get_career_advisor().test_connection():
            print("    ✅ AI provider: CONNECTED")
        else:
            print("    ❌ AI provider: FAILED")
    else:
        print("    ⚠️  AI provider: API key not configured (career guidance returns the fallback reply)")

    print("\n[3] Testing Cloudinary...")
    if settings.cloudinary_cloud_name:
        if test_cloudinary_connection():
            print("    ✅ Cloudinary: CONNECTED")
        else:
            print("    ❌ Cloudinary: FAILED")
    else:
        print("    ⚠️  Cloudinary: credentials not configured")

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
