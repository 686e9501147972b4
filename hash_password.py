#!/usr/bin/env python3
"""Hash a host admin secret with Argon2 for seeding hosts directly in the database."""
import sys

from app.core.security import get_password_hash

if len(sys.argv) != 2:
    print("Usage: python hash_password.py 'host-admin-secret'")
    print()
    print("Example:")
    print("  python hash_password.py 'KioskUnlock42'")
    sys.exit(1)

secret = sys.argv[1]

if len(secret) < 6:
    print("Error: Admin secret must be at least 6 characters long")
    sys.exit(1)

secret_hash = get_password_hash(secret)

print("Admin secret hash generated.")
print()
print("Store this in hosts.admin_secret:")
print("-" * 80)
print(secret_hash)
print("-" * 80)
