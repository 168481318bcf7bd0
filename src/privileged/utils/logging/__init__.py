"""JSON Lines logging for decision logs and the CLI --log-file.

    from privileged.utils.logging.jsonl import setup_jsonl_logger
"""

__all__: list[str] = []
