"""
Smoke test for the zonetrack core backend.
Run this first against a real client log to confirm the reader and
scanner agree with what you see in the file.

Usage:
    python verify_core.py path/to/Client.txt
"""

import sys


def main():
    if len(sys.argv) < 2:
        print("Usage: python verify_core.py <path_to_client_log>")
        sys.exit(1)

    log_path = sys.argv[1]

    # === Test 1: Imports ===
    print("=" * 60)
    print("TEST 1: Import core and scanner modules")
    print("=" * 60)

    from core import ReadError, read_log
    from zonetrack.scanner import DEFAULT_SHAPE, MalformedLogLine, extract_area_name

    print("  [PASS] All modules imported successfully.\n")

    # === Test 2: Read log ===
    print("=" * 60)
    print("TEST 2: Read client log")
    print("=" * 60)

    try:
        doc = read_log(log_path)
    except ReadError as e:
        print(f"  [FAIL] {e}: {e.__cause__}")
        sys.exit(1)

    print(f"  [PASS] Loaded: {log_path}")
    print(f"         Lines: {len(doc)}\n")

    # === Test 3: Marker lines ===
    print("=" * 60)
    print(f"TEST 3: Lines containing '{DEFAULT_SHAPE.marker}'")
    print("=" * 60)

    matches = [line for line in doc if DEFAULT_SHAPE.marker in line]
    print(f"  Marker lines: {len(matches)}")
    for line in matches[-5:]:
        print(f"    {line[:110]}")
    print()

    if not matches:
        print("  [WARN] No marker lines. Has the client loaded a zone yet?\n")

    # === Test 4: Extract area ===
    print("=" * 60)
    print("TEST 4: Extract current area")
    print("=" * 60)

    try:
        area = extract_area_name(doc)
    except MalformedLogLine as e:
        print(f"  [FAIL] {e}")
        sys.exit(1)

    print(f"  [PASS] Current area: {area!r}\n")


if __name__ == "__main__":
    main()
