import argparse
import json
import logging
import sys
from typing import Dict, List, Optional, Sequence

from .commands import analyze_frequency, generate_predictions, load_and_update_data
from .config import load_config
from .exceptions import DataUnavailableError, InvalidPolicyError, MalformedRecordError
from .serialization import record_to_dict
from .store import HistoryStore

logger = logging.getLogger(__name__)

ALGORITHMS = ['hot', 'cold']


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='ssq-optimizer', description='Double Colour Ball Number Optimizer')
    parser.add_argument('--config', default='config.yaml')
    parser.add_argument('--quiet', action='store_true', help='Only log warnings and errors')
    parser.add_argument('--json', action='store_true', help='Print results as JSON')

    sub = parser.add_subparsers(dest='command', required=True)
    sub.add_parser('update', help='Refresh local history from the network')

    for name, help_text in [('analyze', 'Show red/blue frequency tables'),
                            ('predict', 'Generate ranked number combinations')]:
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument('--algorithm', choices=ALGORITHMS, default='hot',
                         help="'hot' favours frequent numbers, 'cold' favours rare ones")
        cmd.add_argument('--offline', action='store_true', help='Use local history without refreshing')
        if name == 'predict':
            cmd.add_argument('--iterations', type=int, help='Sampling rounds (default from config)')
            cmd.add_argument('--count', type=int, help='Number of combinations to keep')
            cmd.add_argument('--seed', type=int, help='Seed for reproducible output')
    return parser


# ======================
# DISPLAY
# ======================
def _print_frequencies(title: str, table: List[Dict]) -> None:
    print(f"\n{title}:")
    print(f"{'Number':>8} {'Count':>7} {'Weight':>10}")
    for row in table:
        print(f"{row['number']:>8} {row['frequency']:>7} {row['weight']:>10.4f}")


def _print_predictions(predictions: List[Dict]) -> None:
    print("\nRecommended Combinations:")
    for i, p in enumerate(predictions, 1):
        reds = ' '.join(f"{n:02d}" for n in p['red_balls'])
        print(f"Set {i}: {reds} + {p['blue_ball']:02d} (score {p['score']:.4f})")


def _records_for(args, config: Dict) -> List[Dict]:
    if args.offline:
        return [record_to_dict(r) for r in HistoryStore.from_config(config).load()]
    return load_and_update_data(config)


# ======================
# MAIN APPLICATION
# ======================
def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ValueError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(str(e))
        return 1

    level = 'WARNING' if args.quiet else str(config['logging'].get('level', 'INFO')).upper()
    logging.basicConfig(level=level, format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        if args.command == 'update':
            records = load_and_update_data(config)
            if args.json:
                print(json.dumps(records, ensure_ascii=False, indent=2))
            else:
                latest = records[-1] if records else None
                print(f"{len(records)} records in history"
                      + (f", latest issue {latest['issue']} ({latest['date']})" if latest else ""))

        elif args.command == 'analyze':
            records = _records_for(args, config)
            red, blue = analyze_frequency(records, args.algorithm)
            if args.json:
                print(json.dumps({'red': red, 'blue': blue}, indent=2))
            else:
                print(f"Frequency analysis over {len(records)} draws ({args.algorithm})")
                _print_frequencies("Red Balls", red)
                _print_frequencies("Blue Balls", blue)

        elif args.command == 'predict':
            records = _records_for(args, config)
            gen_cfg = config['generation']
            predictions = generate_predictions(
                records,
                args.algorithm,
                iterations=args.iterations if args.iterations is not None else gen_cfg['iterations'],
                prediction_count=args.count if args.count is not None else gen_cfg['prediction_count'],
                seed=args.seed,
            )
            if args.json:
                print(json.dumps(predictions, indent=2))
            else:
                _print_predictions(predictions)

    except (InvalidPolicyError, MalformedRecordError, DataUnavailableError) as e:
        logger.error(f"{type(e).__name__}: {str(e)}")
        return 1
    except (ValueError, RuntimeError, OSError) as e:
        logger.error(f"Error: {str(e)}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
