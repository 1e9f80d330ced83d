"""Anonymize a saved-competitors JSON export.

Replaces every competitor and judge name with a fake name generated by faker
with a fixed seed, so the same person always gets the same replacement. Scores
are left untouched, which makes the output safe to use as a test fixture.

Usage:
    python scripts/anonymize_competitors.py .diabolo/diabolo-saved-competitors.json
    python scripts/anonymize_competitors.py export.json -o tests/fixtures/competitors.json
"""

import argparse
import json
from pathlib import Path

from faker import Faker

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"
DEFAULT_OUTPUT = FIXTURES_DIR / "competitors.json"

SEED = 20250301


def discover_names(competitors: list[dict]) -> set[str]:
    """Collect competitor and judge names, including final-ranking entrant names."""
    names: set[str] = set()
    for record in competitors:
        for key in ("name", "judge_name", "competitor_name"):
            value = record.get(key, "").strip()
            if value:
                names.add(value)
    return names


def generate_fake_names(names: set[str], seed: int) -> dict[str, str]:
    """Generate a mapping of real names to fake names.

    Case variants of a name (e.g. "JANE DOE" and "Jane Doe") map to the same
    fake name, keeping the original casing style.
    """
    fake = Faker(["en_US", "en_GB", "de_DE", "fr_FR"])
    Faker.seed(seed)

    lowered = {n.lower() for n in names}
    used_fakes: set[str] = set()
    by_lower: dict[str, str] = {}
    mapping: dict[str, str] = {}

    for name in sorted(names):
        lower = name.lower()
        if lower not in by_lower:
            fake_name = fake.name()
            while fake_name.lower() in lowered or fake_name.lower() in used_fakes:
                fake_name = fake.name()
            used_fakes.add(fake_name.lower())
            by_lower[lower] = fake_name
        fake_name = by_lower[lower]
        mapping[name] = fake_name.upper() if name.isupper() else fake_name

    return mapping


def apply_replacements(competitors: list[dict], mapping: dict[str, str]) -> list[dict]:
    anonymized = []
    for record in competitors:
        record = dict(record)
        for key in ("name", "judge_name", "competitor_name"):
            value = record.get(key, "").strip()
            if value in mapping:
                record[key] = mapping[value]
        anonymized.append(record)
    return anonymized


def main():
    parser = argparse.ArgumentParser(
        description="Anonymize a saved-competitors JSON export")
    parser.add_argument("input", help="Path to the input JSON file")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT),
                        help=f"Output path (default: {DEFAULT_OUTPUT})")
    args = parser.parse_args()

    competitors = json.loads(Path(args.input).read_text(encoding="utf-8"))

    names = discover_names(competitors)
    print(f"Found {len(names)} unique names")

    mapping = generate_fake_names(names, SEED)

    for original, fake in sorted(mapping.items()):
        print(f"  {original} -> {fake}")

    result = apply_replacements(competitors, mapping)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(result, indent=2), encoding="utf-8")
    print(f"Written to {output_path}")


if __name__ == "__main__":
    main()
