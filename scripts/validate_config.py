#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from signtools_app.config.loader import ConfigLoader
from signtools_app.config.validation import ConfigValidator, ValidationError


def validate_symbol_config(loader: ConfigLoader, symbol: str) -> List[ValidationError]:
    """Validate the merged configuration for one symbol."""
    config = loader.merge_config(symbol)
    return ConfigValidator.validate_config(config)


def main():
    """Validate every profile in symbols.yaml plus the bare defaults."""
    print("🔍 Validating SignTools configuration...")

    loader = ConfigLoader.create()
    symbols = list(loader.load_symbols().keys()) + ["UNKNOWN-SYMBOL"]

    all_valid = True

    for symbol in symbols:
        print(f"\n📊 Validating {symbol}...")
        try:
            errors = validate_symbol_config(loader, symbol)
        except Exception as e:
            print(f"❌ Error validating {symbol}: {e}")
            all_valid = False
            continue

        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print(f"✅ {symbol} configuration is valid")

    if all_valid:
        print(f"\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print(f"\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
