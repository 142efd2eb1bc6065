"""CFG dominance dumping and visualization utilities.

This module renders a control flow graph together with its dominator sets:
- Text: one line per block, in index order
- JSON: machine-readable form for programmatic use
- DOT: Graphviz digraph for visualization
"""

import json

import pydot

from domflow.util.io import formatting


def makeStr(s):
    """Escape string for use in DOT graph labels.

    Args:
        s: String to escape.

    Returns:
        str: Escaped, quoted string suitable for DOT graphs.
    """
    s = s.replace("\\", "\\\\")
    s = s.replace('"', '\\"')
    s = s.replace("\n", "\\n")
    return '"%s"' % s


def _dominatorIds(info, node):
    if node.index >= len(info.doms) or info.doms[node.index] is None:
        return None
    return [info.graph.id_of(i) for i in info.doms[node.index]]


def generate_text(graph, info):
    """Generate the text rendering of a graph and its dominator sets.

    Args:
        graph: ControlFlowGraph that was analysed.
        info: DominanceInfo computed for graph.

    Returns:
        str: One line per block, e.g. "2 [1] succs=[3] preds=[1] doms={1, 2}".
    """
    lines = []
    for node in graph:
        doms = _dominatorIds(info, node)
        if doms is None:
            domText = "<unreachable>"
        else:
            domText = formatting.idSet(doms)
        lines.append(
            "%s [%d] succs=[%s] preds=[%s] doms=%s"
            % (
                node.id,
                node.index,
                formatting.idList(graph.successor_ids(node.index)),
                formatting.idList(graph.predecessor_ids(node.index)),
                domText,
            )
        )
    return "\n".join(lines)


def generate_json(graph, info, indent=2):
    """Generate the JSON rendering of a graph and its dominator sets.

    Unreachable blocks have "dominators": null and "rpo": null.
    """
    nodes = []
    for node in graph:
        nodes.append(
            {
                "id": node.id,
                "index": node.index,
                "successors": graph.successor_ids(node.index),
                "predecessors": graph.predecessor_ids(node.index),
                "rpo": info.rpo.get(node.index),
                "dominators": _dominatorIds(info, node),
            }
        )
    entry = graph.id_of(graph.entry) if graph.entry is not None else None
    return json.dumps(
        {"entry": entry, "passes": info.passes, "nodes": nodes}, indent=indent
    )


class DominanceToDot(object):
    """Builds a pydot graph showing blocks, edges and dominator sets.

    The entry block is drawn as a double circle and unreachable blocks are
    dashed and grey.
    """

    entryColor = "lightgreen"
    blockColor = "lightyellow"
    unreachableColor = "grey"

    def __init__(self, g):
        self.g = g
        self.nodes = {}

    def style(self, graph, info, node):
        doms = _dominatorIds(info, node)
        if doms is None:
            label = makeStr("%s\n<unreachable>" % (node.id,))
            return dict(
                label=label,
                shape="box",
                style="dashed",
                color=self.unreachableColor,
                fontcolor=self.unreachableColor,
                fontsize=8,
            )

        label = makeStr("%s\ndom %s" % (node.id, formatting.idSet(doms)))
        if node.index == graph.entry:
            return dict(
                label=label,
                shape="doublecircle",
                style="filled",
                fillcolor=self.entryColor,
                fontsize=8,
            )
        return dict(
            label=label,
            shape="box",
            style="filled",
            fillcolor=self.blockColor,
            fontsize=8,
        )

    def node(self, graph, info, node):
        if node.index not in self.nodes:
            result = pydot.Node("n%d" % node.index, **self.style(graph, info, node))
            self.g.add_node(result)
            self.nodes[node.index] = result
        return self.nodes[node.index]

    def process(self, graph, info):
        for node in graph:
            self.node(graph, info, node)

        for node in graph:
            for succ in node.successors:
                style = "solid" if info.rpo.get(node.index) is not None else "dashed"
                self.g.add_edge(
                    pydot.Edge(
                        self.nodes[node.index].get_name(),
                        self.nodes[succ].get_name(),
                        style=style,
                    )
                )
        return self.g


def generate_dot(graph, info, name="cfg"):
    """Generate a pydot.Dot digraph of a graph and its dominator sets."""
    g = pydot.Dot(name, graph_type="digraph")
    return DominanceToDot(g).process(graph, info)


def render(graph, info, format="text"):
    """Render a graph and its dominator sets in the given format.

    Args:
        graph: ControlFlowGraph that was analysed.
        info: DominanceInfo computed for graph.
        format: "text", "json" or "dot".

    Returns:
        str: The rendering.
    """
    if format == "text":
        return generate_text(graph, info)
    elif format == "json":
        return generate_json(graph, info)
    elif format == "dot":
        return generate_dot(graph, info).to_string()
    else:
        raise ValueError("unknown dump format %r" % (format,))


def generate_spec(graph):
    """Echo a graph back as description lines, one "src: d1, d2" per block.

    Blocks without successors are written as a bare id.
    """
    lines = []
    for node in graph:
        succs = graph.successor_ids(node.index)
        if succs:
            lines.append("%s: %s" % (node.id, formatting.idList(succs)))
        else:
            lines.append(str(node.id))
    return "\n".join(lines)
