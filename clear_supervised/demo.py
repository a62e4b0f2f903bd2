"""
Caller-owned presentation state for the three demos.

A ``TrainerPanel`` plays the role of a "paste JSON, press Train" widget: it
owns the dataset and model currently on display and swaps them only when a
re-train fully succeeds. The trainers themselves stay stateless.
"""

import json
import logging
from functools import partial
from typing import Any, Callable, List, Optional

from .datasets import (
    LINEAR_SAMPLE,
    LOGISTIC_SAMPLE,
    NEURAL_SAMPLE,
    ParseResult,
    parse_linear_dataset,
    parse_logistic_dataset,
    parse_neural_dataset,
)
from .errors import ClearSupervisedError
from .linear import train_linear_regression
from .logistic import train_logistic_regression
from .network import RandomSource, train_neural_network


class TrainerPanel:
    """
    Holds one demo's dataset, fitted model and status line.

    Attributes:
        name: Display name of the demo.
        noun: Plural noun used in success messages (e.g. "sessions").
        dataset: Records the current model was trained on (None before the first success).
        model: The current fitted model (None before the first success).
        status: Last status message.
        failed: Whether the last attempt failed.
    """

    def __init__(self, name: str, parser: Callable[[Any], ParseResult], trainer: Callable[[list], Any],
                 noun: str, success_verb: str = "Re-trained"):
        self.name = name
        self.noun = noun
        self.success_verb = success_verb
        self._parser = parser
        self._trainer = trainer
        self.dataset: Optional[list] = None
        self.model: Any = None
        self.status = ""
        self.failed = False

    def retrain(self, raw: Any) -> bool:
        """
        Validates ``raw`` and trains a new model on it.

        On success the dataset and model are replaced together. On failure both
        are left exactly as they were and only the status changes.

        Returns:
            True if the model was replaced.
        """
        result = self._parser(raw)
        if not result.ok:
            return self._fail(result.message)

        records = result.value
        try:
            model = self._trainer(records)
        except ClearSupervisedError as e:
            return self._fail(e.message)

        self.dataset = records
        self.model = model
        self.status = f"{self.success_verb} on {len(records)} {self.noun}!"
        self.failed = False
        logging.info(f"{self.name}: {self.status}")
        return True

    def retrain_from_json(self, text: str) -> bool:
        """Like ``retrain`` but starting from JSON text; malformed JSON is a failed attempt."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            return self._fail(f"Could not read the JSON: {e.msg} (line {e.lineno}, column {e.colno}).")
        except ValueError as e:
            # e.g. integer literals past the interpreter's digit limit
            return self._fail(f"Could not read the JSON: {e}.")
        return self.retrain(raw)

    def report(self) -> List[str]:
        """Human-readable summary lines of the current model."""
        if self.model is None:
            return []
        return self.model.summary().splitlines()

    def _fail(self, message: str) -> bool:
        self.status = message
        self.failed = True
        logging.warning(f"{self.name}: {message}")
        return False

    def __repr__(self):
        return f"TrainerPanel(name={self.name!r}, status={self.status!r}, failed={self.failed})"


def build_default_panels(rng: RandomSource = None) -> List[TrainerPanel]:
    """The three demo panels, each already trained on its sample dataset.

    Args:
        rng: Seed or Generator handed to the neural network trainer.
    """
    panels = [
        TrainerPanel("Linear regression", parse_linear_dataset, train_linear_regression,
                     noun="sessions", success_verb="Trained"),
        TrainerPanel("Logistic regression", parse_logistic_dataset,
                     partial(train_logistic_regression, learning_rate=0.1, epochs=2500),
                     noun="apples"),
        TrainerPanel("Neural network", parse_neural_dataset,
                     partial(train_neural_network, learning_rate=0.8, epochs=6000, rng=rng),
                     noun="flavor pairs"),
    ]
    for panel, sample in zip(panels, (LINEAR_SAMPLE, LOGISTIC_SAMPLE, NEURAL_SAMPLE)):
        panel.retrain(sample)
    return panels
