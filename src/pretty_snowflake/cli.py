"""Command line utilities for pretty snowflake ids."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

import msgspec
from msgspec import structs

from .config import IdConfig, load_config
from .exceptions import PrettySnowflakeError
from .ids import PrettyIdGenerator
from .metadata import PROJECT_NAME, __version__
from .prettifier import IdPrettifier
from .snowflake import GeneratorStrategy, MachineNode, SnowflakeIdGenerator, decompose_seed

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except (PrettySnowflakeError, ValueError, msgspec.ValidationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROJECT_NAME, description="Generate and inspect pretty snowflake ids")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="JSON or TOML file with prettifier and generator settings")
    parser.add_argument("--alphabet", help="Symbols used for encoded chunks")
    parser.add_argument("--parts-size", type=int, help="Decimal digits per chunk")
    parser.add_argument("--delimiter", help="Separator placed between chunks")
    parser.add_argument(
        "--no-leading-zeros",
        dest="leading_zeros",
        action="store_false",
        default=None,
        help="Render variable-length ids instead of fixed-width ones",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    generate = sub.add_parser("generate", help="Issue new ids")
    generate.add_argument("-n", "--count", type=int, default=1, help="Number of ids to issue")
    generate.add_argument("--machine-id", type=int, help="Machine id in [0, 31]")
    generate.add_argument("--node-id", type=int, help="Node id in [0, 31]")
    generate.add_argument("--strategy", choices=[strategy.value for strategy in GeneratorStrategy])
    generate.add_argument("--label", help="Label printed in front of each id")
    generate.add_argument("--seeds", action="store_true", help="Print the numeric seed next to each id")
    generate.set_defaults(func=_cmd_generate)

    prettify = sub.add_parser("prettify", help="Render numeric seeds as pretty ids")
    prettify.add_argument("seeds", nargs="+", type=int)
    prettify.set_defaults(func=_cmd_prettify)

    parse = sub.add_parser("parse", help="Recover numeric seeds from pretty ids")
    parse.add_argument("ids", nargs="+")
    parse.set_defaults(func=_cmd_parse)

    validate = sub.add_parser("validate", help="Check pretty ids; exits 1 if any is invalid")
    validate.add_argument("ids", nargs="+")
    validate.set_defaults(func=_cmd_validate)

    inspect = sub.add_parser("inspect", help="Split a seed into timestamp, worker and sequence")
    inspect.add_argument("seed", type=int)
    inspect.set_defaults(func=_cmd_inspect)
    return parser


def _load(args: argparse.Namespace) -> IdConfig:
    config = load_config(args.config) if args.config else IdConfig()
    overrides = {
        name: value
        for name in ("alphabet", "parts_size", "delimiter", "leading_zeros")
        if (value := getattr(args, name)) is not None
    }
    if overrides:
        config = structs.replace(config, prettifier=structs.replace(config.prettifier, **overrides))
    return config


def _cmd_generate(args: argparse.Namespace) -> int:
    config = _load(args)
    options = config.generator
    machine_node = MachineNode(
        options.machine_id if args.machine_id is None else args.machine_id,
        options.node_id if args.node_id is None else args.node_id,
    )
    strategy = GeneratorStrategy(args.strategy or options.strategy)
    generator = PrettyIdGenerator(
        SnowflakeIdGenerator(machine_node, strategy, epoch_ms=options.epoch_ms),
        IdPrettifier.from_config(config.prettifier),
        label=config.label if args.label is None else args.label,
    )
    logger.debug("Issuing %d ids from %r", args.count, generator.generator)
    for _ in range(args.count):
        issued = generator.next_id()
        print(f"{issued}\t{issued.snowflake}" if args.seeds else issued)
    return 0


def _cmd_prettify(args: argparse.Namespace) -> int:
    prettifier = IdPrettifier.from_config(_load(args).prettifier)
    for seed in args.seeds:
        print(prettifier.prettify(seed))
    return 0


def _cmd_parse(args: argparse.Namespace) -> int:
    prettifier = IdPrettifier.from_config(_load(args).prettifier)
    for text in args.ids:
        print(prettifier.to_id_seed(text))
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    prettifier = IdPrettifier.from_config(_load(args).prettifier)
    status = 0
    for text in args.ids:
        valid = prettifier.is_valid(text)
        print(f"{text}\t{'valid' if valid else 'invalid'}")
        if not valid:
            status = 1
    return status


def _cmd_inspect(args: argparse.Namespace) -> int:
    config = _load(args)
    parts = decompose_seed(args.seed, epoch_ms=config.generator.epoch_ms)
    print(msgspec.json.format(msgspec.json.encode(parts)).decode())
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
