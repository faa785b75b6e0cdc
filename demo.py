"""
OrderedTree Demo -- Scenario walkthrough, height degradation, depth profiles,
removal behaviour, and rank-query verification.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from ordered_tree import OrderedTree
from traversal import TraversalOrder

SEED = 42
np.random.seed(SEED)

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

SCENARIO_VALUES = [5, 3, 8, 1, 4, 7, 9]
GROWTH_SIZES = [50, 100, 200, 400, 800, 1200]
DEPTH_SAMPLE_SIZE = 2000
CHURN_SIZE = 600

COLORS = {
    "blue": "#3498db",
    "red": "#e74c3c",
    "orange": "#f39c12",
    "green": "#27ae60",
    "purple": "#9b59b6",
    "dark": "#2c3e50",
}

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
log = logging.getLogger("demo")


def _random_order(n):
    return np.random.permutation(n).tolist()


# ---------------------------------------------------------------------------
# Example 1: Scenario Walkthrough
# ---------------------------------------------------------------------------
def example_1_scenario():
    """Build the seven-element scenario tree and run every query kind on it."""
    print("=" * 60)
    print("Example 1: Scenario Walkthrough")
    print("=" * 60)

    tree = OrderedTree(SCENARIO_VALUES)
    print(f"\n  Inserted: {SCENARIO_VALUES}")
    print(f"  In-order:   {tree.in_order().to_list()}")
    print(f"  Pre-order:  {tree.pre_order().to_list()}")
    print(f"  Post-order: {tree.post_order().to_list()}")
    print(f"  size={tree.size()} height={tree.height()}")
    print(f"  element_at(0)={tree.element_at(0)} element_at(6)={tree.element_at(6)}")
    print(f"  floor(6)={tree.floor(6)} ceiling(6)={tree.ceiling(6)}")
    print(f"  higher(8)={tree.higher(8)} lower(1)={tree.lower(1)}")
    print(f"  range(3, 8)={tree.range(3, 8)}")
    print("\n  Shape:")
    for line in tree.to_tree_diagram().splitlines():
        print(f"    {line}")

    removed = tree.clone()
    removed.remove(5)
    print(f"\n  After remove(5): {removed} (size {removed.size()})")

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    values = tree.to_ordered_array()
    axes[0].bar([str(v) for v in values], tree.depths(), color=COLORS["blue"], edgecolor="white")
    axes[0].invert_yaxis()
    axes[0].set_xlabel("Value (in-order)")
    axes[0].set_ylabel("Depth")
    axes[0].set_title("Node Depths Before remove(5)")
    axes[0].grid(True, alpha=0.3, axis="y")

    after = removed.to_ordered_array()
    axes[1].bar([str(v) for v in after], removed.depths(), color=COLORS["orange"], edgecolor="white")
    axes[1].invert_yaxis()
    axes[1].set_xlabel("Value (in-order)")
    axes[1].set_title("Node Depths After remove(5)\nPredecessor 4 takes the root")
    axes[1].grid(True, alpha=0.3, axis="y")

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_scenario.png", dpi=150)
    plt.close(fig)

    return fig, tree


# ---------------------------------------------------------------------------
# Example 2: Height Degradation
# ---------------------------------------------------------------------------
def example_2_height_degradation():
    """Sorted input builds a chain; random input stays near logarithmic height."""
    print("\n" + "=" * 60)
    print("Example 2: Height Degradation Without Rebalancing")
    print("=" * 60)

    sorted_heights = []
    random_heights = []
    for n in GROWTH_SIZES:
        sorted_tree = OrderedTree(range(n))
        random_tree = OrderedTree(_random_order(n))
        sorted_heights.append(sorted_tree.height())
        random_heights.append(random_tree.height())
        print(f"  n={n:5d}  sorted height={sorted_tree.height():5d}  random height={random_tree.height():3d}")

    sizes = np.array(GROWTH_SIZES)
    fig, axes = plt.subplots(1, 2, figsize=(12, 5))
    axes[0].plot(sizes, sorted_heights, "o-", color=COLORS["red"], label="Sorted insertion")
    axes[0].plot(sizes, random_heights, "s-", color=COLORS["green"], label="Random insertion")
    axes[0].set_xlabel("Number of elements")
    axes[0].set_ylabel("Tree height")
    axes[0].set_title("Height vs Size")
    axes[0].legend()
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(sizes, random_heights, "s-", color=COLORS["green"], label="Random insertion")
    axes[1].plot(sizes, np.log2(sizes + 1), "--", color=COLORS["dark"], label="log2(n + 1)")
    axes[1].plot(sizes, 2.99 * np.log(sizes), ":", color=COLORS["purple"], label="2.99 ln(n)")
    axes[1].set_xlabel("Number of elements")
    axes[1].set_title("Random Insertion vs Logarithmic Bounds")
    axes[1].legend()
    axes[1].grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_height_degradation.png", dpi=150)
    plt.close(fig)

    return fig, (sorted_heights, random_heights)


# ---------------------------------------------------------------------------
# Example 3: Depth Distribution
# ---------------------------------------------------------------------------
def example_3_depth_distribution():
    print("\n" + "=" * 60)
    print("Example 3: Depth Distribution for Random Insertion")
    print("=" * 60)

    tree = OrderedTree(_random_order(DEPTH_SAMPLE_SIZE))
    depths = np.array(tree.depths())
    print(f"  n={tree.size()} height={tree.height()}")
    print(f"  mean depth={depths.mean():.2f} median depth={np.median(depths):.1f}")
    print(f"  2 ln(n) = {2 * np.log(DEPTH_SAMPLE_SIZE):.2f}")

    fig, ax = plt.subplots(figsize=(8, 5))
    bins = np.arange(1, depths.max() + 2) - 0.5
    ax.hist(depths, bins=bins, color=COLORS["blue"], edgecolor="white")
    ax.axvline(depths.mean(), color=COLORS["red"], linestyle="--", label=f"mean = {depths.mean():.1f}")
    ax.set_xlabel("Node depth")
    ax.set_ylabel("Node count")
    ax.set_title(f"Depth Distribution (n = {DEPTH_SAMPLE_SIZE}, random order)")
    ax.legend()
    ax.grid(True, alpha=0.3, axis="y")
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_depth_distribution.png", dpi=150)
    plt.close(fig)

    return fig, depths


# ---------------------------------------------------------------------------
# Example 4: Insert/Remove Churn
# ---------------------------------------------------------------------------
def example_4_churn():
    """Predecessor replacement shifts weight right over many deletions."""
    print("\n" + "=" * 60)
    print("Example 4: Height and Size Under Insert/Remove Churn")
    print("=" * 60)

    tree = OrderedTree(_random_order(CHURN_SIZE))
    heights = [tree.height()]
    sizes = [tree.size()]
    for value in _random_order(CHURN_SIZE)[: CHURN_SIZE // 2]:
        tree.remove(value)
        heights.append(tree.height())
        sizes.append(tree.size())
    for value in (np.random.randint(CHURN_SIZE, 2 * CHURN_SIZE, CHURN_SIZE // 2)).tolist():
        tree.insert(value)
        heights.append(tree.height())
        sizes.append(tree.size())

    print(f"  final size={tree.size()} height={tree.height()} valid={tree.is_valid()}")

    steps = np.arange(len(heights))
    fig, ax1 = plt.subplots(figsize=(10, 5))
    ax1.plot(steps, heights, color=COLORS["purple"], label="Height")
    ax1.set_xlabel("Operation")
    ax1.set_ylabel("Height", color=COLORS["purple"])
    ax2 = ax1.twinx()
    ax2.plot(steps, sizes, color=COLORS["orange"], alpha=0.7, label="Size")
    ax2.set_ylabel("Size", color=COLORS["orange"])
    ax1.axvline(CHURN_SIZE // 2, color=COLORS["dark"], linestyle=":", alpha=0.6)
    ax1.set_title("Removals Then Insertions")
    ax1.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "04_churn.png", dpi=150)
    plt.close(fig)

    return fig, tree


# ---------------------------------------------------------------------------
# Example 5: Rank Queries
# ---------------------------------------------------------------------------
def example_5_rank_queries():
    print("\n" + "=" * 60)
    print("Example 5: Rank Queries vs np.sort")
    print("=" * 60)

    raw = np.random.randint(-10_000, 10_000, 1500)
    tree = OrderedTree(raw.tolist())
    expected = np.unique(raw)
    ranks = np.arange(tree.size())
    got = np.array([tree.element_at(int(i)) for i in ranks])
    mismatches = int(np.sum(got != expected))
    print(f"  {raw.size} draws, {tree.size()} distinct, mismatches={mismatches}")
    print(f"  pre-order first={tree.traverse(TraversalOrder.PRE_ORDER).to_list()[0]} (the root)")

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.plot(ranks, got, color=COLORS["blue"], linewidth=2, label="element_at(i)")
    ax.plot(ranks, expected, "--", color=COLORS["red"], label="np.unique(draws)[i]")
    ax.set_xlabel("Rank i")
    ax.set_ylabel("Value")
    ax.set_title(f"Order Statistics ({mismatches} mismatches)")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "05_rank_queries.png", dpi=150)
    plt.close(fig)

    return fig, mismatches


def generate_pdf_report(figures_data):
    """Generate comprehensive PDF report."""
    print("\n" + "=" * 60)
    print("Generating PDF Report")
    print("=" * 60)

    pdf_path = VIZ_DIR.parent / "report.pdf"

    with PdfPages(pdf_path) as pdf:
        fig = plt.figure(figsize=(11, 8.5))
        fig.text(0.5, 0.6, "OrderedTree", fontsize=36, ha="center", fontweight="bold")
        fig.text(0.5, 0.5, "Unbalanced BST with Order Statistics", fontsize=24, ha="center")
        fig.text(0.5, 0.35, "Demonstration & Analysis Report", fontsize=18, ha="center", style="italic")
        fig.text(0.5, 0.2, f"Seed: {SEED}", fontsize=12, ha="center", color="gray")
        pdf.savefig(fig)
        plt.close(fig)

        for title, filename in figures_data:
            page = plt.figure(figsize=(11, 8.5))
            page.text(0.5, 0.98, title, fontsize=14, ha="center", fontweight="bold")
            img = plt.imread(VIZ_DIR / filename)
            ax = page.add_axes([0.05, 0.05, 0.9, 0.88])
            ax.imshow(img)
            ax.axis("off")
            pdf.savefig(page)
            plt.close(page)

    print(f"PDF report saved to: {pdf_path}")
    return pdf_path


def main():
    print("\n" + "#" * 60)
    print("#" + " " * 22 + "ORDEREDTREE DEMO" + " " * 20 + "#")
    print("#" * 60)
    print(f"\nRandom seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}")

    example_1_scenario()
    example_2_height_degradation()
    example_3_depth_distribution()
    _, churned = example_4_churn()
    _, mismatches = example_5_rank_queries()
    if mismatches or not churned.is_valid():
        log.warning("tree checks failed: mismatches=%d valid=%s", mismatches, churned.is_valid())

    generate_pdf_report([
        ("Example 1: Scenario", "01_scenario.png"),
        ("Example 2: Height Degradation", "02_height_degradation.png"),
        ("Example 3: Depth Distribution", "03_depth_distribution.png"),
        ("Example 4: Churn", "04_churn.png"),
        ("Example 5: Rank Queries", "05_rank_queries.png"),
    ])

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print(f"\nGenerated files:")
    for f in sorted(VIZ_DIR.glob("*.png")):
        print(f"  - {f.relative_to(VIZ_DIR.parent)}")
    print(f"  - report.pdf")


if __name__ == "__main__":
    main()
