import argparse
import json
import logging
import sys
from typing import List, Optional

from .datasets import (
    LINEAR_SAMPLE,
    LOGISTIC_SAMPLE,
    NEURAL_SAMPLE,
    parse_linear_dataset,
    parse_logistic_dataset,
    parse_neural_dataset,
)
from .errors import ClearSupervisedError
from .linear import train_linear_regression
from .logistic import train_logistic_regression
from .network import train_neural_network
from .options import LOGISTIC_EPOCHS, LOGISTIC_LEARNING_RATE, NEURAL_EPOCHS, NEURAL_LEARNING_RATE

SAMPLES = {
    'linear': LINEAR_SAMPLE,
    'logistic': LOGISTIC_SAMPLE,
    'neural': NEURAL_SAMPLE,
}

PARSERS = {
    'linear': parse_linear_dataset,
    'logistic': parse_logistic_dataset,
    'neural': parse_neural_dataset,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='clear_supervised',
        description='Train a toy supervised model on a JSON dataset.',
    )
    parser.add_argument('model', choices=sorted(SAMPLES), help='Which model to train')
    parser.add_argument('data', nargs='?', help='JSON file holding an array of records (default: built-in sample)')
    parser.add_argument('--learning-rate', type=float, help='Step size for the gradient-descent models')
    parser.add_argument('--epochs', type=int, help='Training epochs for the gradient-descent models')
    parser.add_argument('--seed', type=int, help='Seed for the neural network initial weights')
    parser.add_argument('--plot', metavar='OUT.png', help='Save a plot of the fitted model')
    parser.add_argument('--verbose', action='store_true', help='Log training progress')
    return parser


def _train(kind: str, records: list, args: argparse.Namespace):
    if kind == 'linear':
        return train_linear_regression(records)
    log_every = 500 if args.verbose else 0
    if kind == 'logistic':
        return train_logistic_regression(
            records,
            learning_rate=args.learning_rate if args.learning_rate is not None else LOGISTIC_LEARNING_RATE,
            epochs=args.epochs if args.epochs is not None else LOGISTIC_EPOCHS,
            log_every=log_every,
        )
    return train_neural_network(
        records,
        learning_rate=args.learning_rate if args.learning_rate is not None else NEURAL_LEARNING_RATE,
        epochs=args.epochs if args.epochs is not None else NEURAL_EPOCHS,
        rng=args.seed,
        log_every=log_every,
    )


def _save_plot(kind: str, records: list, model, path: str):
    # Imported lazily so that training alone never needs a display backend
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt
    from . import plotting

    if kind == 'linear':
        ax = plotting.plot_linear_fit(records, model)
    elif kind == 'logistic':
        ax = plotting.plot_logistic_boundary(records, model)
    else:
        ax = plotting.plot_neural_confidence(records, model)
    ax.figure.tight_layout()
    ax.figure.savefig(path)
    plt.close(ax.figure)
    logging.info(f"Plot saved to {path}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.model == 'linear' and (args.learning_rate is not None or args.epochs is not None):
        parser.error('--learning-rate and --epochs do not apply to linear regression (it is fitted in closed form)')
    if args.model != 'neural' and args.seed is not None:
        parser.error('--seed does not apply to the regression models (only the neural network is randomly initialized)')
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    if args.data:
        try:
            with open(args.data, encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            print(f"Error: could not read {args.data}: {e}", file=sys.stderr)
            return 1
    else:
        raw = SAMPLES[args.model]

    result = PARSERS[args.model](raw)
    if not result.ok:
        print(f"Error ({result.kind.value}): {result.message}", file=sys.stderr)
        return 1

    try:
        model = _train(args.model, result.value, args)
    except ClearSupervisedError as e:
        print(f"Error ({e.kind.value}): {e.message}", file=sys.stderr)
        return 1

    print(model.summary())
    if args.plot:
        _save_plot(args.model, result.value, model, args.plot)
    return 0
