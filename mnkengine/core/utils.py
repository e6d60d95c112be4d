def format_info(depth, score, nodes, elapsed, row, col) -> str:
    """One-line search summary; ``elapsed`` is in milliseconds."""
    depth_str = "full" if depth is None or depth < 0 else str(depth)
    nps = int(nodes * 1000 / elapsed) if elapsed > 0 else 0
    move_str = f"{row},{col}" if row >= 0 else "-"
    return f"info depth {depth_str} score {score} nodes {nodes} nps {nps} time {int(elapsed)} move {move_str}"
