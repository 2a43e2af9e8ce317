"""Interactive, validated configuration of saved preferences."""

from collections.abc import Callable

from card_price_tracker.config.settings import (
    DEFAULT_OUTLIER_THRESHOLD,
    DEFAULT_TRADE_LIMIT,
    OUTLIER_THRESHOLD_KEY,
    TRADE_LIMIT_KEY,
    SettingsPort,
    parse_outlier_threshold,
    parse_trade_limit,
)


INVALID_LIMIT_MESSAGE = "Invalid input. Please enter a positive number."
INVALID_THRESHOLD_MESSAGE = "Invalid input. Please enter a number of zero or more."


def _ask(question: str, current: object, input_fn: Callable[[str], str]) -> str | None:
    """Return the stripped answer, or None if the prompt was cancelled."""
    try:
        answer = input_fn(f"{question} [{current}]: ")
    except EOFError:
        return None
    answer = answer.strip()
    return answer or None


def prompt_trade_limit(
    store: SettingsPort,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> int | None:
    """
    Ask for the number of trades to show and save it.

    Returns the saved limit, or None when cancelled or invalid. Unlike the
    lenient parsers, invalid input is reported instead of replaced.
    """
    current = parse_trade_limit(store.get(TRADE_LIMIT_KEY))
    answer = _ask("Enter the number of trades to show", current, input_fn)
    if answer is None:
        return None

    if parse_trade_limit(answer, default=-1) < 0:
        output_fn(INVALID_LIMIT_MESSAGE)
        return None

    limit = parse_trade_limit(answer)
    store.set(TRADE_LIMIT_KEY, str(limit))
    output_fn(f"Trades to Show set to {limit}")
    return limit


def prompt_outlier_threshold(
    store: SettingsPort,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> float | None:
    """Ask for the outlier threshold (std devs) and save it."""
    current = parse_outlier_threshold(store.get(OUTLIER_THRESHOLD_KEY))
    answer = _ask("Enter the outlier threshold", current, input_fn)
    if answer is None:
        return None

    threshold = parse_outlier_threshold(answer, default=-1.0)
    if threshold < 0:
        output_fn(INVALID_THRESHOLD_MESSAGE)
        return None

    store.set(OUTLIER_THRESHOLD_KEY, repr(threshold))
    output_fn(f"Outlier Threshold set to {threshold}")
    return threshold


def main() -> None:
    """CLI entry point for configuring saved preferences."""
    import argparse
    import sys

    from card_price_tracker.config.settings import Settings
    from card_price_tracker.data.store import SettingsStore

    parser = argparse.ArgumentParser(description="Configure card tracker preferences")
    parser.add_argument("--trade-limit", action="store_true", help="Set trades to show")
    parser.add_argument("--threshold", action="store_true", help="Set outlier threshold")
    parser.add_argument("--show", action="store_true", help="Show saved preferences and exit")
    args = parser.parse_args()

    store = SettingsStore(Settings().db_path)

    if args.show or not (args.trade_limit or args.threshold):
        saved = store.items()
        print(f"{TRADE_LIMIT_KEY}: {saved.get(TRADE_LIMIT_KEY, DEFAULT_TRADE_LIMIT)}")
        print(f"{OUTLIER_THRESHOLD_KEY}: {saved.get(OUTLIER_THRESHOLD_KEY, DEFAULT_OUTLIER_THRESHOLD)}")
        return

    failed = False
    if args.trade_limit and prompt_trade_limit(store) is None:
        failed = True
    if args.threshold and prompt_outlier_threshold(store) is None:
        failed = True
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
