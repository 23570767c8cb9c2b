#!/usr/bin/env python3
"""
Script to verify basic setup and configuration.

This script checks that:
1. All dependencies are installed
2. Configuration can be loaded
3. Logging is working correctly
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def check_imports():
    """Check that all core dependencies can be imported."""
    print("Checking imports...")

    for module in ("pydantic", "pydantic_settings", "numpy"):
        try:
            __import__(module)
            print(f"✓ {module}")
        except ImportError as e:
            print(f"✗ {module}: {e}")
            return False

    print()
    return True


def check_configuration():
    """Check that configuration can be loaded."""
    print("Checking configuration...")

    try:
        from marketguard.config.settings import get_settings

        settings = get_settings()

        print("✓ Configuration loaded")
        print(f"  - Environment: {settings.app.environment}")
        print(f"  - Platform name: {settings.content_filter.platform_name}")
        print(f"  - Max field length: {settings.content_filter.max_field_length}")
        print(f"  - Default preferred type: {settings.matching.default_preferred_type}")
        print(f"  - Log level: {settings.logging.level}")
        print()
        return True

    except Exception as e:
        print(f"✗ Configuration failed: {e}")
        print()
        return False


def check_logging():
    """Check that logging is working."""
    print("Checking logging...")

    try:
        from marketguard.infra.logging.config import LogContext, get_logger, setup_logging

        setup_logging()
        logger = get_logger(__name__)

        logger.info("Test log message")
        print("✓ Basic logging works")

        with LogContext(user_id="setup-check", conversation_id="c-1"):
            logger.info("Test log with context")
        print("✓ Context logging works")

        print()
        return True

    except Exception as e:
        print(f"✗ Logging failed: {e}")
        print()
        return False


def main():
    """Run all checks."""
    print("=" * 60)
    print("marketguard - Setup Verification")
    print("=" * 60)
    print()

    results = [
        ("Imports", check_imports()),
        ("Configuration", check_configuration()),
        ("Logging", check_logging()),
    ]

    print("=" * 60)
    print("Summary:")
    print("=" * 60)

    all_passed = True
    for name, passed in results:
        status = "✓ PASSED" if passed else "✗ FAILED"
        print(f"{name}: {status}")
        if not passed:
            all_passed = False

    print()

    if all_passed:
        print("All checks passed! Setup is complete.")
        return 0

    print("Some checks failed. Please check the errors above.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
