"""
Network Visualization Script
Displays the structure of a saved network with ASCII art and a PNG diagram
"""

import os
import sys
from datetime import datetime

import numpy as np
import matplotlib.pyplot as plt

from backprop import Network
from continuous_train import NETWORK_CHECKPOINT, load_config, load_network


STRONG_WEIGHT = 2.0
MEDIUM_WEIGHT = 0.5


def layer_name(network: Network, layer_idx: int) -> str:
    return network.layers[layer_idx].kind.value.upper()


def weight_strength(weight: float) -> str:
    """Classify a weight by magnitude: 'strong', 'medium' or 'weak'."""
    magnitude = abs(weight)
    if magnitude > STRONG_WEIGHT:
        return 'strong'
    if magnitude > MEDIUM_WEIGHT:
        return 'medium'
    return 'weak'


def visualize_network(network: Network):
    """Display network structure with ASCII art"""

    print("\n" + "="*80)
    print("NEURAL NETWORK STRUCTURE VISUALIZATION")
    print("="*80)

    print(f"\n📊 Network Summary:")
    print(f"   Total Layers: {len(network.layers)}")
    print(f"   Total Neurons: {sum(len(layer) for layer in network.layers)}")
    print(f"   Total Connections: {sum(layer.connection_count for layer in network.layers)}")
    print(f"   Epoch: {network.epoch}")
    print(f"   Smoothed Error: {network.error_percentage:.3f}%")

    print(f"\n📐 Layer Architecture:")
    for i, layer in enumerate(network.layers):
        print(f"   Layer {i} ({layer.kind.value.capitalize()}): {len(layer)} neurons")

    print(f"\n🔗 Network Connections:")
    print()
    for layer_idx, layer in enumerate(network.layers):
        print(f"  Layer {layer_idx} [{layer_name(network, layer_idx)}]")
        print()

        for neuron_idx, neuron in enumerate(layer.neurons):
            print(f"    ● N{neuron_idx} (output={neuron.output:.3f}, gradient={neuron.gradient:+.4f})")

            if neuron.outgoing:
                by_strength = {'strong': [], 'medium': []}
                for next_idx, connection in enumerate(neuron.outgoing):
                    strength = weight_strength(connection.weight)
                    if strength in by_strength:
                        by_strength[strength].append((next_idx, connection.weight))

                if by_strength['strong']:
                    conn_str = ", ".join(f"N{idx}({w:+.1f})" for idx, w in by_strength['strong'][:3])
                    if len(by_strength['strong']) > 3:
                        conn_str += f" +{len(by_strength['strong'])-3} more"
                    print(f"      ══► Strong: {conn_str}")

                if by_strength['medium']:
                    conn_str = ", ".join(f"N{idx}({w:+.1f})" for idx, w in by_strength['medium'][:2])
                    if len(by_strength['medium']) > 2:
                        conn_str += f" +{len(by_strength['medium'])-2} more"
                    print(f"      ──► Medium: {conn_str}")

                print(f"      └── {len(neuron.outgoing)} total connections to Layer {layer_idx+1}")
            print()

        if layer_idx < len(network.layers) - 1:
            print("      ║")
            print("      ╚═══════════════════════════════════════════════")
            print("      ║")
            print()

    print(f"\n📊 Connection Matrix Summary:")
    for layer_idx in range(1, len(network.layers)):
        layer = network.layers[layer_idx]
        weights = np.array(layer.export_weights())

        print(f"\n   Layer {layer_idx-1} → Layer {layer_idx}:")
        print(f"   {len(network.layers[layer_idx-1])} neurons → {len(layer)} neurons")
        print(f"   Weight stats: mean={np.mean(weights):.3f}, "
              f"std={np.std(weights):.3f}, "
              f"range=[{np.min(weights):.3f}, {np.max(weights):.3f}]")
        print(f"   Strong connections (|w|>{STRONG_WEIGHT}): "
              f"{np.sum(np.abs(weights) > STRONG_WEIGHT)}/{len(weights)}")


def show_legend():
    """Display legend for symbols"""
    print("\n" + "="*80)
    print("LEGEND")
    print("="*80)
    print("\nConnection Strength:")
    print(f"  ══► Strong (|weight| > {STRONG_WEIGHT})")
    print(f"  ──► Medium (|weight| > {MEDIUM_WEIGHT})")
    print(f"  ··► Weak (|weight| ≤ {MEDIUM_WEIGHT})")
    print()


def generate_network_image(network: Network, output_path: str = "output/network_visualization.png") -> str:
    """Generate a PNG image of the network with connections"""
    print(f"\n🎨 Generating network visualization image...")

    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    fig, ax = plt.subplots(figsize=(16, 12))
    ax.set_aspect('equal')
    ax.axis('off')

    n_layers = len(network.layers)
    layer_spacing = 1.0 / (n_layers + 1)

    # Neuron objects -> (x, y), so connections can be drawn from their endpoints
    neuron_positions = {}

    for layer_idx, layer in enumerate(network.layers):
        n_neurons = len(layer)
        x = layer_spacing * (layer_idx + 1)

        if n_neurons == 1:
            y_positions = [0.5]
        else:
            y_spacing = 0.8 / max(n_neurons - 1, 1)
            y_start = 0.5 - (n_neurons - 1) * y_spacing / 2
            y_positions = [y_start + i * y_spacing for i in range(n_neurons)]

        for neuron_idx, neuron in enumerate(layer.neurons):
            y = y_positions[neuron_idx]
            neuron_positions[id(neuron)] = (x, y)

            # Color by activation: dark for ~0, bright for ~1
            shade = plt.cm.viridis(float(np.clip(neuron.output, 0.0, 1.0)))
            circle = plt.Circle((x, y), 0.015, color=shade, ec='#2c3e50',
                                linewidth=2, zorder=3)
            ax.add_patch(circle)
            ax.text(x, y, f'N{neuron_idx}', ha='center', va='center',
                    fontsize=6, fontweight='bold', color='white', zorder=4)

    styles = {
        'strong': dict(alpha=0.7, linewidth=2.5),
        'medium': dict(alpha=0.4, linewidth=1.5),
        'weak': dict(alpha=0.15, linewidth=0.5),
    }
    for layer in network.layers[1:]:
        for connection in layer.incoming_connections:
            x1, y1 = neuron_positions[id(connection.source)]
            x2, y2 = neuron_positions[id(connection.destination)]
            color = '#3498db' if connection.weight >= 0 else '#e74c3c'
            ax.plot([x1, x2], [y1, y2], color=color, zorder=1,
                    **styles[weight_strength(connection.weight)])

    for layer_idx, layer in enumerate(network.layers):
        x = layer_spacing * (layer_idx + 1)
        name = layer_name(network, layer_idx)
        if name == "HIDDEN":
            name = f"HIDDEN {layer_idx}"
        ax.text(x, 0.95, f"{name}\n({len(layer)} neurons)", ha='center', va='top',
                fontsize=10, fontweight='bold',
                bbox=dict(boxstyle='round,pad=0.5', facecolor='lightgray', alpha=0.8))

    title = f"Momentum Backprop Network\n"
    title += f"Epoch: {network.epoch} | "
    title += f"Smoothed Error: {network.error_percentage:.3f}%"
    ax.text(0.5, 1.0, title, ha='center', va='top',
            fontsize=12, fontweight='bold', transform=ax.transAxes)

    legend_elements = [
        plt.Line2D([0], [0], color='#3498db', lw=2.5, alpha=0.7, label=f'Positive weight (|w|>{STRONG_WEIGHT})'),
        plt.Line2D([0], [0], color='#e74c3c', lw=2.5, alpha=0.7, label=f'Negative weight (|w|>{STRONG_WEIGHT})'),
        plt.Line2D([0], [0], color='#3498db', lw=1.5, alpha=0.4, label=f'Medium (|w|>{MEDIUM_WEIGHT})'),
        plt.Line2D([0], [0], color='#3498db', lw=0.5, alpha=0.15, label=f'Weak (|w|≤{MEDIUM_WEIGHT})'),
    ]
    ax.legend(handles=legend_elements, loc='upper left', bbox_to_anchor=(0, -0.02),
              ncol=2, framealpha=0.9, fontsize=8)

    ax.set_xlim(-0.05, 1.05)
    ax.set_ylim(-0.15, 1.05)

    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    ax.text(0.99, 0.01, f"Generated: {timestamp}", ha='right', va='bottom',
            fontsize=7, style='italic', transform=ax.transAxes, alpha=0.6)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight', facecolor='white')
    plt.close(fig)

    print(f"✓ Network visualization saved to: {output_path}")
    return output_path


def main():
    """Main visualization function"""
    print("\n🔍 Loading Neural Network...")

    checkpoint = sys.argv[1] if len(sys.argv) > 1 else NETWORK_CHECKPOINT
    try:
        network = load_network(load_config(), checkpoint)
    except ValueError as e:
        print(f"❌ Invalid network configuration: {e}")
        return

    if network is None:
        print("❌ No checkpoint found. Train the network first with:")
        print("   python continuous_train.py --new")
        return

    print("✓ Network loaded successfully!")

    generate_network_image(network)
    visualize_network(network)
    show_legend()

    print("="*80)
    print()


if __name__ == "__main__":
    main()
