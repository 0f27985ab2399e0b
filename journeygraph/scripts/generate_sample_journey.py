"""Generate sample journey records for trying out the analyzer.

Generates two journeys:
- three_day_nurture: SMS, call and webhook steps split by DAYS delays,
  with a condition whose branches rejoin
- split_test: a weighted path with an hour delay on one side and a
  disconnected draft node
"""

import json
import sys
from pathlib import Path


def _node(node_id: str, node_type: str, config: dict | None = None, connections: dict | None = None) -> dict:
    node = {
        "id": node_id,
        "type": node_type,
        "config": config or {},
        "positionX": 0,
        "positionY": 0,
    }
    if connections is not None:
        node["connections"] = connections
    return node


def create_three_day_nurture() -> dict:
    """Day 1 SMS + call, day 2 follow-up by condition, day 3 webhook."""
    return {
        "id": "sample-three-day-nurture",
        "name": "Three Day Nurture",
        "description": "Intro text, call attempt, follow-up by reply status",
        "status": "DRAFT",
        "nodes": [
            _node("welcome-sms", "SEND_SMS", {"messageContent": "Hi {{firstName}}!"},
                  {"outputs": {"success": "intro-call"}}),
            _node("intro-call", "MAKE_CALL", {"recordCall": True},
                  {"nextNodeId": "wait-1d"}),
            _node("wait-1d", "TIME_DELAY", {"delayValue": 1, "delayUnit": "DAYS"},
                  {"outputs": {"completed": "replied"}}),
            _node("replied", "CONDITION", {
                "branches": [
                    {
                        "id": "yes",
                        "label": "Replied",
                        "condition": {"field": "message.received", "operator": "exists"},
                        "nextNodeId": "thanks-sms",
                    },
                ],
                "defaultBranch": {"nextNodeId": "nudge-sms"},
            }),
            _node("thanks-sms", "SEND_SMS", {"messageContent": "Thanks for replying!"},
                  {"nextNodeId": "wait-2d"}),
            _node("nudge-sms", "SEND_SMS", {"messageContent": "Just checking in."},
                  {"nextNodeId": "wait-2d"}),
            _node("wait-2d", "TIME_DELAY", {"delayValue": 1, "delayUnit": "DAYS"},
                  {"nextNodeId": "crm-webhook"}),
            _node("crm-webhook", "EXECUTE_WEBHOOK", {"webhookUrl": "https://example.com/hook"}),
        ],
    }


def create_split_test() -> dict:
    """Weighted 50/50 split; the hour delay keeps its side on day 1."""
    return {
        "id": "sample-split-test",
        "name": "Split Test",
        "status": "DRAFT",
        "nodes": [
            _node("split", "WEIGHTED_PATH", {
                "paths": [
                    {"id": "a", "label": "Text first", "percentage": 50, "nextNodeId": "text-a"},
                    {"id": "b", "label": "Wait first", "percentage": 50, "nextNodeId": "wait-2h"},
                ],
            }),
            _node("text-a", "SEND_SMS", {"messageContent": "Variant A"}),
            _node("wait-2h", "TIME_DELAY", {"delayValue": 2, "delayUnit": "HOURS"},
                  {"nextNodeId": "text-b"}),
            _node("text-b", "SEND_SMS", {"messageContent": "Variant B"}),
            _node("draft-status", "UPDATE_CONTACT_STATUS", {"leadStatus": "CONTACT_MADE"}),
        ],
    }


SAMPLES = {
    "three_day_nurture": create_three_day_nurture,
    "split_test": create_split_test,
}


def write_samples(output_dir: Path) -> list[Path]:
    """Write every sample journey as <name>.json under output_dir."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for name, factory in SAMPLES.items():
        path = output_dir / f"{name}.json"
        with open(path, "w") as f:
            json.dump(factory(), f, indent=2)
        written.append(path)
    return written


def main() -> None:
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("sample_journeys")
    for path in write_samples(output_dir):
        print(f"Wrote {path}")


if __name__ == "__main__":
    main()
