from pathlib import Path

from netops.environment.simulated_host import SimulatedHost
from netops.visualization.network_visualizer import NetworkVisualizer


def main():
    host = SimulatedHost.from_yaml(str(Path(__file__).with_name("sample_network.yaml")), echo=False)
    network_vis = NetworkVisualizer(host, origin=host.origin)

    G = network_vis.build_graph(max_hop=3)
    print(f"Scanned {G.number_of_nodes()} servers and {G.number_of_edges()} links")

    fig = network_vis.visualize_network_state(max_hop=3)
    output = Path("network_map.html")
    fig.write_html(str(output))
    print(f"Network map written to {output.resolve()}")


if __name__ == "__main__":
    main()
