from typing import Optional

import networkx as nx
import plotly.graph_objects as go

from netops.environment.host import Host
from netops.network.traversal import hop_distances


class NetworkVisualizer:
    """Draws the part of the game network visible from the origin."""

    def __init__(self, host: Host, origin: str = "home"):
        self.host = host
        self.origin = origin

    def build_graph(self, max_hop: Optional[int] = None) -> nx.Graph:
        """Scan the network up to ``max_hop`` hops into a networkx graph.

        Each node carries ``hop``, ``rooted``, ``max_ram`` and ``ram_used``.
        """
        depths = hop_distances(self.origin, self.host.scan, max_depth=max_hop)
        G = nx.Graph()
        for server, hop in depths.items():
            G.add_node(
                server,
                hop=hop,
                rooted=self.host.has_root_access(server),
                max_ram=self.host.get_server_max_ram(server),
                ram_used=self.host.get_server_used_ram(server)
            )
        for server in depths:
            for neighbor in self.host.scan(server):
                if neighbor in depths:
                    G.add_edge(server, neighbor)
        return G

    def visualize_network_state(self, max_hop: Optional[int] = None, highlight_rooted: bool = True) -> go.Figure:
        """Create interactive network visualization."""
        G = self.build_graph(max_hop)
        pos = nx.spring_layout(G, seed=42)

        # Create edges trace
        edge_x, edge_y = [], []
        for edge in G.edges():
            x0, y0 = pos[edge[0]]
            x1, y1 = pos[edge[1]]
            edge_x.extend([x0, x1, None])
            edge_y.extend([y0, y1, None])

        edge_trace = go.Scatter(
            x=edge_x,
            y=edge_y,
            line=dict(width=0.5, color='#888'),
            hoverinfo='none',
            mode='lines'
        )

        # Create nodes trace
        node_x, node_y = [], []
        node_colors = []
        node_text = []

        for server in G.nodes():
            x, y = pos[server]
            node_x.append(x)
            node_y.append(y)
            node_colors.append(self._get_node_color(G.nodes[server], highlight_rooted))
            node_text.append(self._get_node_text(server, G.nodes[server]))

        node_trace = go.Scatter(
            x=node_x,
            y=node_y,
            mode='markers+text',
            hoverinfo='text',
            hovertext=node_text,
            text=list(G.nodes()),
            textposition='top center',
            marker=dict(
                size=12,
                color=node_colors,
                line_width=2
            )
        )

        fig = go.Figure(
            data=[edge_trace, node_trace],
            layout=go.Layout(
                title=f"Network from {self.origin}",
                showlegend=False,
                hovermode='closest',
                margin=dict(b=20, l=5, r=5, t=40)
            )
        )

        return fig

    def _get_node_color(self, attrs: dict, highlight_rooted: bool) -> str:
        if attrs['hop'] == 0:
            return '#0000ff'  # Origin
        if not highlight_rooted:
            return '#808080'
        return '#00ff00' if attrs['rooted'] else '#ff0000'

    @staticmethod
    def _get_node_text(server: str, attrs: dict) -> str:
        """Generate hover text for node."""
        return (f"{server}<br>"
                f"Hop: {attrs['hop']}<br>"
                f"Root: {attrs['rooted']}<br>"
                f"RAM: {attrs['ram_used']} / {attrs['max_ram']} GB")
