"""
Command line entry point.

    python -m webext_schemas [TAG] [--namespaces] [--yaml]

Without TAG the latest stable Firefox release is used. Prints the raw schemas
(or the namespace index with --namespaces) as JSON, or YAML with --yaml.
"""
import asyncio
import json
import logging
import sys

import yaml

from webext_schemas.core.dependencies import get_loader_config
from webext_schemas.services.loader import SchemaLoader


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    flags = {a for a in args if a.startswith("--")}
    positional = [a for a in args if not a.startswith("--")]

    unknown = flags - {"--namespaces", "--yaml"}
    if unknown or len(positional) > 1:
        print(__doc__, file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    config = get_loader_config()
    if positional:
        config = config.with_tag(positional[0])

    try:
        loader = asyncio.run(SchemaLoader(config).run())
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    data = loader.namespaces() if "--namespaces" in flags else loader.raw_schemas()
    if "--yaml" in flags:
        print(yaml.safe_dump(data, sort_keys=False))
    else:
        print(json.dumps(data, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
