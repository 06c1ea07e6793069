"""Shared CLI utilities."""

import sys

from rich.console import Console

console = Console()


def get_components(load_model: bool = True):
    """Initialize config, store and (optionally) the inference engine.

    Args:
        load_model: If False, skip loading the classifier (history-only commands).
    """
    from cli.config import load_config_model
    from inference.engine import load_engine
    from predictions.store import create_store

    try:
        config = load_config_model()
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    engine = None
    if load_model:
        try:
            engine = load_engine(config.model.url, input_size=config.model.input_size)
        except ValueError as e:
            console.print(f"[red]Config error:[/] {e}")
            sys.exit(1)

    store = create_store(
        config.store.backend,
        project=config.store.project,
        database=config.store.database,
        collection=config.store.collection,
    )

    return {"config": config, "engine": engine, "store": store}
