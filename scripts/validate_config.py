#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from projection_engine.config.loader import ConfigLoader
from projection_engine.config.validation import ConfigValidator, ValidationError


def validate_engine_config(overrides: Optional[Dict[str, Any]] = None) -> List[ValidationError]:
    """Validate the merged engine configuration."""
    loader = ConfigLoader.create()
    config = loader.merge_config(overrides)
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    print("Validating projection engine configuration...")

    all_valid = True

    print("\nValidating defaults merged with config/engine.yaml...")
    errors = validate_engine_config()
    if errors:
        print(f"Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  - {error.field}: {error.message} (value: {error.value})")
        all_valid = False
    else:
        print("Engine configuration is valid")

    print("\nTesting caller overrides...")
    test_overrides = {
        "irr": {
            "tolerance": 1e-6,
            "max_iterations": 400,
        },
        "validation": {
            "probability_tolerance": 0.1,
        },
    }

    errors = validate_engine_config(test_overrides)
    if errors:
        print("Override validation failed:")
        for error in errors:
            print(f"  - {error.field}: {error.message}")
        all_valid = False
    else:
        print("Override validation passed")

    if all_valid:
        print("\nAll configuration validation passed!")
        sys.exit(0)
    else:
        print("\nConfiguration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
