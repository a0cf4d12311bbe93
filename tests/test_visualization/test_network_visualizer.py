from netops.visualization.network_visualizer import NetworkVisualizer


def test_build_graph_limits_hops(network):
    G = NetworkVisualizer(network).build_graph(max_hop=1)

    assert set(G.nodes()) == {"home", "n00dles", "foodnstuff", "pserv-0"}
    assert G.number_of_edges() == 3
    assert G.nodes["home"]["hop"] == 0
    assert G.nodes["pserv-0"]["rooted"] is True
    assert G.nodes["n00dles"]["max_ram"] == 4


def test_build_graph_full_network(network):
    G = NetworkVisualizer(network).build_graph()

    assert G.number_of_nodes() == 6
    assert G.nodes["neo-net"]["hop"] == 2


def test_visualize_network_state(network):
    fig = NetworkVisualizer(network).visualize_network_state(max_hop=2)

    edge_trace, node_trace = fig.data
    assert len(node_trace.x) == 6
    assert list(node_trace.text).count("home") == 1
    assert node_trace.marker.color[0] == '#0000ff'
