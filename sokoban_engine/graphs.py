from __future__ import annotations
from typing import Dict, List, Tuple
import torch
from torch_geometric.data import Data

from .board import BoardModel
from .reachability import neighbors
from .state import DynamicState


def grid_to_graph(board: BoardModel, state: DynamicState) -> Tuple[Data, Dict[int, int]]:
    """Build a PyG graph from a Sokoban state.

    Nodes: all non-wall cells. Walls excluded.
    Edges: 4-neighborhood between non-wall cells (both directions).
    Node features (x): [is_goal, has_box, is_agent, walls_around/4].

    Returns (Data, idx2nid) where idx2nid maps cell index -> node id.
    """
    W, H = board.cols, board.rows

    floor: List[int] = []
    idx2nid: Dict[int, int] = {}
    for idx in range(board.cells):
        if not board.is_wall(idx):
            idx2nid[idx] = len(floor)
            floor.append(idx)
    if not floor:
        raise ValueError("Empty graph: no floor cells")

    src: List[int] = []
    dst: List[int] = []
    for idx in floor:
        for j in neighbors(idx, H, W):
            if j in idx2nid:
                src.append(idx2nid[idx])
                dst.append(idx2nid[j])
    edge_index = torch.tensor([src, dst], dtype=torch.long)

    feats: List[List[float]] = []
    for idx in floor:
        is_goal = 1.0 if board.is_goal_cell(idx) else 0.0
        has_box = 1.0 if state.has_box(idx) else 0.0
        is_agent = 1.0 if idx == state.agent else 0.0
        # board edge counts as wall
        open_around = sum(1 for j in neighbors(idx, H, W) if not board.is_wall(j))
        feats.append([is_goal, has_box, is_agent, (4 - open_around) / 4.0])

    x = torch.tensor(feats, dtype=torch.float)
    data = Data(x=x, edge_index=edge_index)
    return data, idx2nid
