#!/usr/bin/env python3
"""
🚀 NoseCone Setup Validation

Checks that:
- All relay modules import cleanly
- Required environment variables are set
- Configured values have a valid format

Usage:
    python scripts/validate-setup.py
"""

import importlib
import os
import sys
from pathlib import Path
from typing import List, Tuple

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

# ============================================
# What to check
# ============================================

MODULES = [
    ("nosecone.infrastructure.log", "Logger"),
    ("nosecone.config", "Configuration"),
    ("nosecone.domain.payload", "Payload normalizer"),
    ("nosecone.domain.router", "Delivery router"),
    ("nosecone.adapters.webhook.dispatcher", "Webhook dispatcher"),
    ("nosecone.adapters.discord.adapter", "Discord adapter"),
    ("nosecone.adapters.web.server", "HTTP server"),
]

REQUIRED_ENV_VARS = [
    "DISCORD_BOT_TOKEN",
    "DISCORD_CLIENT_ID",
    "N8N_WEBHOOK_URL",
]

OPTIONAL_ENV_VARS = [
    "N8N_WEBHOOK_TOKEN",
    "N8N_SECONDARY_WEBHOOK",
    "BOT_PREFIX",
    "COMMAND_CHANNEL_ID",
    "DEBUG_MODE",
    "LOG_FILE",
    "HTTP_PORT",
]


# ============================================
# Checker Functions
# ============================================

def check_imports() -> List[str]:
    errors = []
    print("📦 Testing module imports...")
    for module_name, label in MODULES:
        try:
            importlib.import_module(module_name)
            print(f"  ✅ {label} imported successfully")
        except Exception as e:
            errors.append(f"{label} import failed: {e}")
            print(f"  ❌ {label} import failed")
    return errors


def check_env() -> Tuple[List[str], List[str]]:
    errors, warnings = [], []
    print("\n⚙️  Checking environment configuration...")
    for name in REQUIRED_ENV_VARS:
        if os.getenv(name):
            print(f"  ✅ {name} is configured")
        else:
            errors.append(f"Required environment variable {name} is not set")
            print(f"  ❌ {name} is not configured (required)")
    for name in OPTIONAL_ENV_VARS:
        if os.getenv(name):
            print(f"  ✅ {name} is configured")
        else:
            warnings.append(f"Optional environment variable {name} is not set")
            print(f"  ⚠️  {name} is not configured (optional)")
    return errors, warnings


def check_values() -> List[str]:
    """Format problems are reported as warnings; missing values were already counted."""
    from nosecone.config import AppConfig

    print("\n🔍 Environment variable validation...")
    problems = [p for p in AppConfig.from_env().validate() if "is required" not in p]
    if not problems:
        print("  ✅ Configured values look valid")
    for p in problems:
        print(f"  ⚠️  {p}")
    return problems


def main():
    """Main entry point"""
    print("🚀 NoseCone Setup Validation\n")

    errors = check_imports()
    env_errors, warnings = check_env()
    errors.extend(env_errors)
    if not any("Configuration" in e for e in errors):
        warnings.extend(check_values())

    print("\n" + "=" * 70)
    if errors:
        print(f"❌ Setup validation failed with {len(errors)} error(s):")
        for e in errors:
            print(f"   - {e}")
    else:
        print("✅ Setup validation passed!")
    if warnings:
        print(f"⚠️  {len(warnings)} warning(s)")
    print("=" * 70)

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
