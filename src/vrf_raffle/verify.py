from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict

from .config import RaffleConfig
from .draw import pick_winner
from .raffle import Settlement

TOOL_NAME = "vrf-raffle"
TOOL_VERSION = "1.0.0"


def build_audit(settlement: Settlement, config: RaffleConfig) -> Dict[str, Any]:
    return {
        "metadata": {
            "tool": TOOL_NAME,
            "version": TOOL_VERSION,
            "generated_at_utc": datetime.now(timezone.utc).isoformat(),
            "request_id": str(settlement.request_id),
            # big ints; store as strings for safety
            "random_words": [str(w) for w in settlement.random_words],
            "entrance_fee": str(config.entrance_fee),
            "pool_size": len(settlement.players),
            "winner_index": settlement.winner_index,
            "settled_at": settlement.settled_at,
        },
        "winner": {
            "address": settlement.winner,
            "amount": str(settlement.amount),
        },
        # Insertion order is the draw order; anyone can re-run the pick.
        "all_entrants": list(settlement.players),
    }


def write_audit(audit: Dict[str, Any], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(audit, f, indent=2)


def verify_audit(audit_path: str) -> Dict[str, Any]:
    with open(audit_path, "r", encoding="utf-8") as f:
        audit = json.load(f)

    meta = audit["metadata"]
    random_words = [int(w) for w in meta["random_words"]]
    entrants = list(audit["all_entrants"])

    pool_size = int(meta["pool_size"])
    if pool_size != len(entrants):
        raise RuntimeError(
            f"Pool size mismatch: audit={pool_size} recomputed={len(entrants)}"
        )

    winner_index, winner = pick_winner(entrants, random_words)
    winner_index_expected = int(meta["winner_index"])
    if winner_index != winner_index_expected:
        raise RuntimeError(
            f"Winner index mismatch: audit={winner_index_expected} recomputed={winner_index}"
        )

    winner_expected = audit["winner"]["address"]
    if winner != winner_expected:
        raise RuntimeError(f"Winner mismatch: audit={winner_expected} recomputed={winner}")

    amount = int(audit["winner"]["amount"])
    tickets = entrants.count(winner)
    if amount < pool_size * int(meta["entrance_fee"]):
        raise RuntimeError(
            f"Payout {amount} is below the pool minimum {pool_size} x {meta['entrance_fee']}"
        )

    return {
        "ok": True,
        "request_id": int(meta["request_id"]),
        "winner": winner,
        "winner_index": winner_index,
        "winner_tickets": tickets,
        "pool_size": pool_size,
        "amount": amount,
    }
