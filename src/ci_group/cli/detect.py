"""Provider detection CLI command."""

import argparse
import json


def cmd_detect(args: argparse.Namespace) -> int:
    from ci_group.provider import detect

    provider = detect()
    if args.json:
        print(json.dumps({"provider": provider.value, "active": provider.is_active}))
    else:
        print(provider.value)
    return 0
