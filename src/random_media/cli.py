from __future__ import annotations

import argparse
import json
import random
import sys

from random_media.config import settings
from random_media.domain.policy import POLICIES, policy_from_settings
from random_media.engine.messages import translate
from random_media.engine.picker import MediaPicker
from random_media.errors import RandomMediaError
from random_media.log import setup_logging
from random_media.provider.pixabay import Category, MediaQuery, MediaType, Orientation


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="random-media")
    p.add_argument("--log-level", default=settings.log_level)
    sub = p.add_subparsers(dest="cmd", required=True)

    pk = sub.add_parser("pick", help="Fetch a batch from Pixabay and pick one item")
    pk.add_argument("--type", choices=[m.value for m in MediaType], default="image")
    pk.add_argument("--q", default=None)
    pk.add_argument("--category", choices=[c.value for c in Category], default=None)
    pk.add_argument("--orientation", choices=[o.value for o in Orientation], default=None)
    pk.add_argument("--randomness", type=float, default=settings.default_randomness)
    pk.add_argument("--policy", choices=sorted(POLICIES), default=None)
    pk.add_argument("--seed", type=int, default=None, help="Seed the draw for a reproducible pick")
    pk.add_argument("--lang", default="en")
    pk.add_argument("--out", default=None, help="Write the result JSON here instead of stdout")

    srv = sub.add_parser("serve", help="Run the HTTP API")
    srv.add_argument("--host", default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)

    args = p.parse_args(argv)
    setup_logging(args.log_level)

    if args.cmd == "serve":
        import uvicorn

        uvicorn.run("random_media.api.app:app", host=args.host, port=args.port)
        return 0

    if args.cmd == "pick":
        policy = None
        if args.policy == "legacy":
            policy = POLICIES["legacy"]
        elif args.policy == "default":
            policy = policy_from_settings(settings.model_copy(update={"policy": "default"}))
        rng = random.Random(args.seed) if args.seed is not None else None
        picker = MediaPicker(rng=rng, policy=policy)
        query = MediaQuery(
            type=MediaType(args.type),
            q=args.q,
            category=args.category,
            orientation=args.orientation,
            randomness=args.randomness,
        )
        try:
            result = picker.pick(query)
        except RandomMediaError as exc:
            print(translate(exc.message_key, args.lang), file=sys.stderr)
            return 1

        if result["download"] is None:
            print(translate("download_unavailable", args.lang), file=sys.stderr)

        text = json.dumps(result, indent=2, ensure_ascii=False)
        if args.out:
            with open(args.out, "w", encoding="utf-8") as f:
                f.write(text)
            print(f"Wrote {args.out} (id={result['media'].get('id')})")
        else:
            print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
