"""
Visualization helpers: loss curves, 2-D datasets, decision boundaries.

All functions draw onto `ax` if given, otherwise onto a fresh figure, and
return the axes.
"""

import matplotlib.pyplot as plt
import numpy as np

from .errors import InvalidArgument


def plot_loss_history(loss_history, ax=None, title='Training loss', log_scale=True):
    """Mean squared residual per epoch (NeuralNetwork.loss_history)."""
    if len(loss_history) == 0:
        raise InvalidArgument("Nothing to plot: loss history is empty")
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(6, 4))

    epochs = np.arange(1, len(loss_history) + 1)
    ax.plot(epochs, loss_history, color='steelblue', linewidth=1.5)
    if log_scale and min(loss_history) > 0:
        ax.set_yscale('log')
    ax.set_xlabel('Epoch')
    ax.set_ylabel('Mean squared residual')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    return ax


def plot_dataset(X, y, ax=None, title='', alpha=0.6, s=20):
    """
    Scatter 2-D points, one series per distinct label. Labels are coloured
    from the same RdYlBu map the decision boundary is shaded with, so a
    point's colour matches the region the network should put it in.
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(5, 5))

    X = np.asarray(X)
    y = np.asarray(y).ravel()
    labels = np.unique(y)
    low, high = labels.min(), labels.max()
    span = (high - low) or 1.0

    for label in labels:
        points = X[y == label]
        color = plt.cm.RdYlBu((label - low) / span)
        ax.scatter(points[:, 0], points[:, 1], color=color, label=f'y = {label:g}',
                   alpha=alpha, s=s, edgecolors='k', linewidths=0.3)

    ax.set_title(title)
    ax.set_aspect('equal', adjustable='box')
    ax.legend(loc='upper right', fontsize=8)
    return ax


def plot_decision_boundary(network, X, y, ax=None, title='', resolution=50, alpha=0.3):
    """
    Shade the network's first output over a grid covering X, then overlay
    the data. Needs a network with two inputs.
    """
    if network.input_size() != 2:
        raise InvalidArgument(f"Decision boundary needs a 2-input network, got {network.input_size()}")
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(5, 5))

    X = np.asarray(X)
    x_min, x_max = X[:, 0].min() - 0.5, X[:, 0].max() + 0.5
    y_min, y_max = X[:, 1].min() - 0.5, X[:, 1].max() + 0.5

    xx, yy = np.meshgrid(np.linspace(x_min, x_max, resolution),
                         np.linspace(y_min, y_max, resolution))

    grid = np.c_[xx.ravel(), yy.ravel()]
    Z = np.array([network.predict(point)[0] for point in grid])
    Z = Z.reshape(xx.shape)

    ax.contourf(xx, yy, Z, alpha=alpha, cmap=plt.cm.RdYlBu)
    ax.contour(xx, yy, Z, levels=[0.5], colors='k', linewidths=0.8)

    plot_dataset(X, y, ax=ax, title=title, alpha=0.8, s=15)
    return ax
