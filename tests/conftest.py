import copy
import json

import pytest
from loguru import logger

from ohh2stars.domain.models import HandRecord

SAMPLE_HAND = {
    "spec_version": "1.4.3",
    "site_name": "iPoker",
    "network_name": "iPoker Network",
    "internal_version": "1.0.0",
    "tournament": False,
    "game_number": "lv0irhede81k",
    "start_date_utc": "2023-12-05T02:50:49.886Z",
    "table_name": "pglCX2WsUJbPBjsNSE1siiDJy",
    "table_handle": "pglCX2WsUJbPBjsNSE1siiDJy",
    "game_type": "Holdem",
    "bet_limit": {"bet_type": "NL", "bet_cap": 0},
    "table_size": 10,
    "currency": "PPC",
    "dealer_seat": 8,
    "small_blind_amount": 0.05,
    "big_blind_amount": 0.1,
    "ante_amount": 0,
    "flags": ["Observed"],
    "players": [
        {"id": 1, "seat": 1, "name": "Agapito", "display": "Agapito", "starting_stack": 19.9, "player_bounty": 0},
        {"id": 4, "seat": 4, "name": "DubNation", "display": "DubNation", "starting_stack": 9.8, "player_bounty": 0},
        {"id": 5, "seat": 5, "name": "CFFl2rCOze", "display": "bella", "starting_stack": 11.2, "player_bounty": 0},
        {"id": 6, "seat": 6, "name": "-c6EEVvXCE", "display": "bdawg", "starting_stack": 10, "player_bounty": 0},
        {"id": 7, "seat": 7, "name": "E9V-2MDLwt", "display": "Redorange", "starting_stack": 10.55, "player_bounty": 0},
        {"id": 8, "seat": 8, "name": "JzhSREGpIj", "display": "Drank", "starting_stack": 8.55, "player_bounty": 0},
    ],
    "rounds": [
        {"id": 0, "street": "Preflop", "cards": [], "actions": [
            {"action_number": 0, "player_id": 4, "action": "Dealt Cards", "cards": ["Ks", "2c"], "is_allin": False},
            {"action_number": 1, "player_id": 6, "action": "Dealt Cards", "cards": ["8s", "Ac"], "is_allin": False},
            {"action_number": 2, "player_id": 1, "action": "Post SB", "amount": 0.05, "is_allin": False},
            {"action_number": 3, "player_id": 4, "action": "Post BB", "amount": 0.1, "is_allin": False},
            {"action_number": 4, "player_id": 5, "action": "Fold", "amount": 0, "is_allin": False},
            {"action_number": 5, "player_id": 6, "action": "Raise", "amount": 0.22, "is_allin": False},
            {"action_number": 6, "player_id": 7, "action": "Fold", "amount": 0, "is_allin": False},
            {"action_number": 7, "player_id": 8, "action": "Fold", "amount": 0, "is_allin": False},
            {"action_number": 8, "player_id": 1, "action": "Fold", "amount": 0, "is_allin": False},
            {"action_number": 9, "player_id": 4, "action": "Call", "amount": 0.12, "is_allin": False},
        ]},
        {"id": 1, "cards": ["4d", "3c", "Kd"], "street": "Flop", "actions": [
            {"action_number": 0, "player_id": 4, "action": "Check", "amount": 0, "is_allin": False},
            {"action_number": 1, "player_id": 6, "action": "Raise", "amount": 0.24, "is_allin": False},
            {"action_number": 2, "player_id": 4, "action": "Call", "amount": 0.24, "is_allin": False},
        ]},
        {"id": 2, "cards": ["Tc"], "street": "Turn", "actions": [
            {"action_number": 0, "player_id": 4, "action": "Check", "amount": 0, "is_allin": False},
            {"action_number": 1, "player_id": 6, "action": "Check", "amount": 0, "is_allin": False},
        ]},
        {"id": 3, "cards": ["Js"], "street": "River", "actions": [
            {"action_number": 0, "player_id": 4, "action": "Raise", "amount": 0.48, "is_allin": False},
            {"action_number": 1, "player_id": 6, "action": "Raise", "amount": 1.5, "is_allin": False},
            {"action_number": 2, "player_id": 4, "action": "Call", "amount": 1.02, "is_allin": False},
            {"action_number": 3, "player_id": 4, "action": "Shows Cards", "cards": ["Ks", "2c"], "is_allin": False},
            {"action_number": 4, "player_id": 6, "action": "Shows Cards", "cards": ["8s", "Ac"], "is_allin": False},
        ]},
    ],
    "pots": [
        {"number": 0, "amount": 3.97, "rake": 0, "jackpot": None,
         "player_wins": [{"player_id": 4, "win_amount": 3.97, "contributed_rake": 0}]},
    ],
}


def minimal_hand(**overrides):
    """Two-player hand with no rounds or pots; tests add what they need."""
    hand = {
        "game_number": "test123",
        "start_date_utc": "2023-12-05T02:50:49.886Z",
        "table_name": "TestTable",
        "table_size": 6,
        "dealer_seat": 3,
        "small_blind_amount": 0.05,
        "big_blind_amount": 0.1,
        "currency": "USD",
        "players": [
            {"id": 1, "seat": 1, "name": "Player1", "starting_stack": 10.0},
            {"id": 2, "seat": 2, "name": "Player2", "starting_stack": 10.0},
        ],
        "rounds": [],
        "pots": [],
    }
    hand.update(overrides)
    return hand


def street(name, actions, cards=(), rid=0):
    return {"id": rid, "street": name, "cards": list(cards), "actions": [
        dict(action_number=i, **a) for i, a in enumerate(actions)
    ]}


@pytest.fixture
def sample_hand_dict():
    return copy.deepcopy(SAMPLE_HAND)


@pytest.fixture
def sample_hand(sample_hand_dict):
    return HandRecord.model_validate(sample_hand_dict)


@pytest.fixture
def sample_text(sample_hand_dict):
    return json.dumps({"ohh": sample_hand_dict})


@pytest.fixture
def log_messages():
    """Collect ohh2stars log records as ``(level, message)`` pairs."""
    records = []
    logger.enable("ohh2stars")
    handler_id = logger.add(lambda m: records.append((m.record["level"].name, m.record["message"])), level="DEBUG")
    yield records
    logger.remove(handler_id)
    logger.disable("ohh2stars")
