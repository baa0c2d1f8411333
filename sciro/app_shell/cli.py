import argparse
import json
import logging
import sys
from pathlib import Path

from sciro.app_shell.replay import load_scenario, run_scenario
from sciro.domain.errors import ConfigurationError
from sciro.rules.loader import load_rules

logger = logging.getLogger("sciro.cli")


def handle_replay(args: argparse.Namespace) -> int:
    scenario = load_scenario(Path(args.scenario))
    insights = run_scenario(scenario, debug=args.debug)
    for insight in insights:
        print(json.dumps(insight.to_dict(), indent=2 if args.pretty else None))
    logger.info(f"Replayed {len(scenario.steps)} steps, {len(insights)} insights emitted.")
    return 0


def handle_check_rules(args: argparse.Namespace) -> int:
    rules = load_rules(Path(args.rules))
    print(json.dumps(rules.model_dump(by_alias=True), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="sciro", description="sciro learner-state engine tools")
    parser.add_argument("--debug", action="store_true", help="Enable diagnostic logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # replay
    replay_parser = subparsers.add_parser("replay", help="Replay a scripted signal scenario")
    replay_parser.add_argument("scenario", help="Path to scenario YAML")
    replay_parser.add_argument("--pretty", action="store_true", help="Indent JSON output")

    # check-rules
    rules_parser = subparsers.add_parser("check-rules", help="Validate a detection rules file")
    rules_parser.add_argument("rules", help="Path to rules YAML")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)

    try:
        if args.command == "replay":
            return handle_replay(args)
        elif args.command == "check-rules":
            return handle_check_rules(args)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
