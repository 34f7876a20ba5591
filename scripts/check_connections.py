#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify MongoDB and the resume upload directory are usable.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from app.core.config import get_settings
from app.core.logging_config import setup_logging
from app.db.context import BackendContext


def main():
    settings = get_settings()
    setup_logging(settings)
    print("=" * 50)
    print("JOB BOARD - CONNECTION CHECK")
    print("=" * 50)

    ctx = BackendContext.from_settings(settings)
    ok = True

    # MongoDB
    print("\n[1] Checking MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if ctx.store.ping():
        print("    ✅ MongoDB: CONNECTED")
    else:
        print("    ❌ MongoDB: FAILED")
        ok = False

    # Upload directory
    print("\n[2] Checking resume storage...")
    print(f"    Directory: {ctx.blobs.root}")
    check_key = ".connection-check"
    try:
        ctx.blobs.upload(check_key, b"ok", "text/plain")
        ctx.blobs.path_for(check_key).unlink()
        print("    ✅ Storage: WRITABLE")
    except Exception as e:
        print(f"    ❌ Storage: FAILED ({e})")
        ok = False

    ctx.close()

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
