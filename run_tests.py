#!/usr/bin/env python3
"""Run every test module as a script (needs the package installed: pip install -e .[test])."""

import subprocess
import sys
from pathlib import Path


def main():
    test_dir = Path(__file__).parent / "tests"
    test_files = sorted(test_dir.glob("test_*.py"))

    if not test_files:
        print("No test files found")
        return 1

    failed = []
    for test_file in test_files:
        print(f"\n{'='*50}")
        print(f"Running {test_file.name}")
        print('='*50)
        result = subprocess.run([sys.executable, str(test_file)], cwd=test_dir)
        if result.returncode != 0:
            failed.append(test_file.name)

    print(f"\n{'='*50}")
    if failed:
        print(f"FAILED: {', '.join(failed)}")
    else:
        print("All tests passed!")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
