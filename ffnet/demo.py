"""
XOR DEMO

    python -m ffnet.demo

1. Full-batch training on the exact XOR truth table:
       [2 linear → 8 tanh → 8 tanh → 1 sigmoid], seed 42,
       20000 epochs, learning rate 0.05.
2. Stochastic training on a noisy XOR point cloud, scored on a held-out split.
3. Saves loss curves and the learned decision boundary to ffnet_xor_demo.png.
"""

import logging

import matplotlib.pyplot as plt
import numpy as np

from .config import DEFAULT_SEED, TrainingConfig
from .datasets import make_xor, to_vectors, train_test_split, xor_table
from .network import NeuralNetwork
from .plotting import plot_decision_boundary, plot_loss_history

XOR_LAYERS = [
    (2, 'linear'),
    (8, 'tanh'),
    (8, 'tanh'),
    (1, 'sigmoid'),
]


def run_truth_table(seed=DEFAULT_SEED, epochs=20000, learning_rate=0.05):
    print("\n1. XOR TRUTH TABLE (full-batch)")
    print("-" * 40)

    network = NeuralNetwork(seed, XOR_LAYERS)
    features, labels = xor_table()
    network.fit(features, labels, TrainingConfig(learning_rate=learning_rate, epochs=epochs,
                                                  stochastic=False, log_every=epochs // 10))

    for feature in features:
        prediction = network.predict(feature)
        inputs = " ".join(f"{value:g}" for value in feature)
        print(f"Input: {inputs} => Prediction: {prediction[0]:.4f}")
    print(f"Final mean squared residual: {network.loss_history[-1]:.6f}")
    return network


def run_noisy_xor(seed=DEFAULT_SEED, epochs=300, learning_rate=0.05):
    print("\n2. NOISY XOR (stochastic, held-out evaluation)")
    print("-" * 40)

    X, y = make_xor(n_samples=200, noise=0.1, random_state=seed)
    X_train, X_test, y_train, y_test = train_test_split(X, y, test_ratio=0.25, random_state=seed)

    network = NeuralNetwork(seed, XOR_LAYERS)
    network.fit(to_vectors(X_train), to_vectors(y_train),
                TrainingConfig(learning_rate=learning_rate, epochs=epochs, stochastic=True, log_every=50))

    test_metrics = network.evaluate(to_vectors(X_test), to_vectors(y_test))
    predictions = np.array([network.predict(x)[0] for x in X_test])
    accuracy = np.mean((predictions >= 0.5) == (y_test == 1))
    print(f"Test mean squared residual: {np.mean(test_metrics):.4f}")
    print(f"Test accuracy: {accuracy:.3f}")
    return network, (X, y)


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 60)
    print("FEED-FORWARD NETWORK — XOR")
    print("=" * 60)

    table_network = run_truth_table()
    noisy_network, (X, y) = run_noisy_xor()

    print("\nGenerating visualizations...")
    fig, axes = plt.subplots(1, 3, figsize=(16, 4.5))
    plot_loss_history(table_network.loss_history, ax=axes[0], title='Truth table (full-batch)')
    plot_loss_history(noisy_network.loss_history, ax=axes[1], title='Noisy XOR (stochastic)')
    plot_decision_boundary(noisy_network, X, y, ax=axes[2], title='Learned boundary')
    plt.tight_layout()

    save_path = 'ffnet_xor_demo.png'
    fig.savefig(save_path, dpi=150, bbox_inches='tight')
    print(f"Saved visualization to: {save_path}")
    plt.close(fig)


if __name__ == '__main__':
    main()
