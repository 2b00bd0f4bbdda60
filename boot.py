import argparse
import logging

from game_context import GameContext
from main_menu import ACTIVITIES, MainMenu
from scene_manager import SceneManager
from visualizers.factor_finder import DEFAULT_NUMBERS, MAX_NUMBER as MAX_FACTOR_NUMBER
from visualizers.lcm_bridge import BridgeConfig
from visualizers.lcm_bridge.quiz import DEFAULT_PAIRS
from visualizers.multiples_reveal import DEFAULT_PAIRS as DEFAULT_MULTIPLE_PAIRS, MAX_NUMBER as MAX_MULTIPLE_NUMBER
from visualizers.shared.questions import parse_numbers, parse_pairs

log = logging.getLogger("boot")


def _parse_size(text):
    try:
        w, h = (int(part) for part in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"bad size {text!r}, expected WxH") from None
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"bad size {text!r}, both sides must be positive")
    return w, h


def _arg_type(parse, **kwargs):
    """Wrap a question parser so argparse prints its message as a usage error."""

    def convert(text):
        try:
            return parse(text, **kwargs)
        except ValueError as e:
            raise argparse.ArgumentTypeError(str(e)) from None

    convert.__name__ = parse.__name__
    return convert


def build_parser():
    parser = argparse.ArgumentParser(description="LCM game: stack blocks, reveal multiples, find factors.")
    parser.add_argument("--size", type=_parse_size, default=(960, 640), help="window size, e.g. 960x640")
    parser.add_argument(
        "--activity",
        choices=[key for key, _ in ACTIVITIES],
        default=None,
        help="open one activity directly instead of the menu",
    )
    parser.add_argument("--pairs", type=_arg_type(parse_pairs), default=list(DEFAULT_PAIRS), help="bridge questions, e.g. 4x6,3x5")
    parser.add_argument(
        "--multiples-pairs",
        type=_arg_type(parse_pairs, limit=MAX_MULTIPLE_NUMBER),
        default=list(DEFAULT_MULTIPLE_PAIRS),
        help="multiples reveal questions, e.g. 4x6,3x5",
    )
    parser.add_argument(
        "--numbers",
        type=_arg_type(parse_numbers, limit=MAX_FACTOR_NUMBER),
        default=list(DEFAULT_NUMBERS),
        help="factor finder numbers, e.g. 12,18",
    )
    parser.add_argument("--block-scale", type=int, default=None)
    parser.add_argument("--crossing-ms", dest="crossing_duration_ms", type=int, default=None)
    parser.add_argument("--bridge-thickness", type=int, default=None)
    parser.add_argument("--drag-min-width", type=int, default=None)
    parser.add_argument("--message-ms", dest="message_clear_ms", type=int, default=None)
    parser.add_argument("--log-level", default="INFO")
    return parser


def launch_options(args, config):
    """Per-activity kwargs for ``launch``."""
    return {
        "lcm_bridge": {"config": config, "pairs": args.pairs},
        "multiples_reveal": {"pairs": args.multiples_pairs},
        "factor_finder": {"numbers": args.numbers},
    }


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    try:
        config = BridgeConfig.from_mapping(vars(args))
    except ValueError as e:
        parser.error(str(e))
    log.info("bridge config: %s", config.as_dict())
    context = GameContext()
    options = launch_options(args, config)

    def on_exit(ctx):
        log.info("activity finished: %s", ctx.summary()["last_result"])

    def first_scene(manager):
        menu = MainMenu(manager, context, options, on_exit)
        scene = menu.build(args.activity) if args.activity else None
        if scene is None:
            return menu
        # The menu stays underneath so leaving the activity returns to it.
        manager.push(menu)
        return scene

    manager = SceneManager(first_scene, size=args.size, context=context)
    manager.run()


if __name__ == "__main__":
    main()
