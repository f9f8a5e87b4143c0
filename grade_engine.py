#!/usr/bin/env python3

import json
import sys

from sizegrade.core.categories import get_category_config
from sizegrade.core.construction import derive_construction_specs, derive_last_specs
from sizegrade.core.size_recommendation import recommend_size


def sizing_report(category: str, base_size: str, body: dict, size_system: str = "EU") -> dict:
    cat = get_category_config(category)
    recommendation = recommend_size(cat, base_size, size_system, body)

    return {
        "category": cat.key,
        "recommendation": recommendation.model_dump(mode="json") if recommendation else None,
        "construction_specs": [s.model_dump() for s in derive_construction_specs(cat, body)],
        "last_specs": [s.model_dump() for s in derive_last_specs(cat, body)],
    }


def main():
    if len(sys.argv) not in (4, 5):
        print(
            f"Usage: python {sys.argv[0]} <category> <base_size> <measurements.json> [size_system]",
            file=sys.stderr,
        )
        sys.exit(1)

    category, base_size, path = sys.argv[1:4]
    size_system = sys.argv[4] if len(sys.argv) == 5 else "EU"

    try:
        with open(path) as f:
            body = json.load(f)
        if not isinstance(body, dict):
            raise ValueError("measurements file must contain a JSON object")
        result = sizing_report(category, base_size, body, size_system)
        print(json.dumps(result, indent=2))
    except (OSError, ValueError) as exc:
        print(json.dumps({"error": str(exc)}), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
