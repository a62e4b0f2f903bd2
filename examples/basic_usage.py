import time
import logging
import matplotlib.pyplot as plt

from clear_supervised import (
    LINEAR_SAMPLE,
    LOGISTIC_SAMPLE,
    NEURAL_SAMPLE,
    parse_linear_dataset,
    parse_logistic_dataset,
    parse_neural_dataset,
    train_linear_regression,
    train_logistic_regression,
    train_neural_network,
)
from clear_supervised.demo import TrainerPanel
from clear_supervised.plotting import (
    plot_linear_fit,
    plot_logistic_boundary,
    plot_neural_confidence,
    plot_training_history,
)


# --- Linear Regression Example ---

def linear_example():
    """Fit a line through tasting hours vs sweetness score."""
    logger = logging.getLogger("LinearExample")
    dataset = parse_linear_dataset(LINEAR_SAMPLE).unwrap()

    model = train_linear_regression(dataset)
    logger.info(model.summary())

    plot_linear_fit(dataset, model)


# --- Logistic Regression Example ---

def logistic_example():
    """Separate market-ready apples from the rest."""
    logger = logging.getLogger("LogisticExample")
    dataset = parse_logistic_dataset(LOGISTIC_SAMPLE).unwrap()

    model = train_logistic_regression(dataset, learning_rate=0.1, epochs=2500, log_every=500)
    logger.info(model.summary())

    for record in dataset:
        probability = model.predict(record.features)
        logger.info(f"Input: {record.features}, Target: {record.label}, Prediction: {probability:.4f}")

    plot_logistic_boundary(dataset, model)


# --- XOR Example ---

def xor_example():
    """Example of training the 2-2-1 network on the XOR problem."""
    logger = logging.getLogger("XORExample")
    dataset = parse_neural_dataset(NEURAL_SAMPLE).unwrap()

    logger.info("Starting XOR training...")
    start_time = time.time()
    model = train_neural_network(dataset, learning_rate=0.8, epochs=6000, rng=7, log_every=1000)
    logger.info(f"XOR training finished in {time.time() - start_time:.2f} seconds")
    logger.info(model.summary())

    correct = 0
    for record in dataset:
        pred = model.predict(record.features)
        is_correct = int(pred >= 0.5) == record.label
        if is_correct: correct += 1
        logger.info(f"Input: {record.features}, Target: {record.label}, Prediction: {pred:.4f} {'(Correct)' if is_correct else '(Incorrect)'}")
    logger.info(f"XOR Accuracy: {correct / len(dataset):.2%}")

    _, (left, right) = plt.subplots(1, 2, figsize=(12, 5))
    plot_training_history(model.history, ax=left)
    plot_neural_confidence(dataset, model, ax=right)
    plt.tight_layout()


# --- Re-training Example ---

def retrain_example():
    """A bad paste leaves the previous model in place."""
    logger = logging.getLogger("RetrainExample")
    panel = TrainerPanel("Linear regression", parse_linear_dataset, train_linear_regression,
                         noun="sessions", success_verb="Trained")

    panel.retrain(LINEAR_SAMPLE)
    logger.info(panel.status)

    panel.retrain_from_json('[{"hours": 5, "score": 10}, {"hours": 5, "score": 20}]')
    logger.info(f"{panel.status} Still showing: {panel.report()[0]}")


# --- Script Execution ---

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    print("\n" + "="*40)
    print("--- Running Linear Regression Example ---")
    print("="*40)
    linear_example()

    print("\n" + "="*40)
    print("--- Running Logistic Regression Example ---")
    print("="*40)
    logistic_example()

    print("\n" + "="*40)
    print("--- Running XOR Classification Example ---")
    print("="*40)
    xor_example()

    print("\n" + "="*40)
    print("--- Running Re-training Example ---")
    print("="*40)
    retrain_example()

    print("\nDisplaying plots. Close plot windows to exit.")
    plt.show()
