from http import HTTPMethod

import pytest
from httpx import AsyncClient

from bladeleague.models.db.tournament import TournamentStructure
from bladeleague.utils.dummy_records import DUMMY_BALANCE_FORMAT
from tests.integration_tests.api.shared import send_request, send_request_for_data


async def create_participant_ids(api_client: AsyncClient, count: int) -> list[int]:
    return [
        (
            await send_request_for_data(
                api_client, HTTPMethod.POST, "participants", {"name": f"Player {i + 1}"}
            )
        )["id"]
        for i in range(count)
    ]


@pytest.mark.asyncio
async def test_round_robin_tournament_flow(api_client: AsyncClient) -> None:
    participant_ids = await create_participant_ids(api_client, 5)
    tournament = await send_request_for_data(
        api_client,
        HTTPMethod.POST,
        "tournaments",
        {
            "name": "Autumn Cup",
            "balance_format_id": DUMMY_BALANCE_FORMAT.id,
            "participant_ids": participant_ids,
        },
    )
    tournament_id = tournament["id"]
    assert tournament["status"] == "Draft"
    assert tournament["structure"] == TournamentStructure.ROUND_ROBIN.value

    schedule = await send_request_for_data(
        api_client, HTTPMethod.POST, f"tournaments/{tournament_id}/schedule"
    )
    assert schedule == {"matches_deleted": 0, "matches_created": 10}

    rounds = await send_request_for_data(
        api_client, HTTPMethod.GET, f"tournaments/{tournament_id}/rounds"
    )
    assert [match_round["label"] for match_round in rounds] == [
        f"Jornada {i}" for i in range(1, 6)
    ]
    assert all(len(match_round["matches"]) == 2 for match_round in rounds)

    matches = await send_request_for_data(
        api_client, HTTPMethod.GET, f"tournaments/{tournament_id}/matches"
    )
    for match in matches:
        first_wins = match["participant1_id"] < match["participant2_id"]
        scores = (3, 1) if first_wins else (1, 3)
        resolved = await send_request_for_data(
            api_client,
            HTTPMethod.POST,
            f"matches/{match['id']}/resolve",
            {"participant1_score": scores[0], "participant2_score": scores[1]},
        )
        assert resolved["winner_id"] == min(match["participant1_id"], match["participant2_id"])

    standings = await send_request_for_data(
        api_client, HTTPMethod.GET, f"tournaments/{tournament_id}/standings"
    )
    assert [(row["name"], row["points"]) for row in standings] == [
        ("Player 1", 8),
        ("Player 2", 7),
        ("Player 3", 6),
        ("Player 4", 5),
        ("Player 5", 4),
    ]
    assert standings[0]["point_differential"] == 8

    participants = await send_request_for_data(api_client, HTTPMethod.GET, "participants")
    assert [(p["name"], p["winrate"]) for p in participants] == [
        ("Player 1", 100),
        ("Player 2", 75),
        ("Player 3", 50),
        ("Player 4", 25),
        ("Player 5", 0),
    ]

    structure = await send_request_for_data(
        api_client, HTTPMethod.POST, f"tournaments/{tournament_id}/toggle_playoffs"
    )
    assert structure == {
        "structure": TournamentStructure.ROUND_ROBIN_PLUS_PLAYOFFS.value,
        "matches_deleted": [],
    }

    semi_finals = await send_request_for_data(
        api_client,
        HTTPMethod.POST,
        f"tournaments/{tournament_id}/playoffs",
        {"playoff_round": "Semi Final"},
    )
    assert [(m["participant1_id"], m["participant2_id"]) for m in semi_finals] == [
        (participant_ids[0], participant_ids[3]),
        (participant_ids[1], participant_ids[2]),
    ]

    rounds = await send_request_for_data(
        api_client, HTTPMethod.GET, f"tournaments/{tournament_id}/rounds"
    )
    assert rounds[-1]["label"] == "Semi Final"
    assert len(rounds) == 6


@pytest.mark.asyncio
async def test_error_responses(api_client: AsyncClient) -> None:
    participant_ids = await create_participant_ids(api_client, 2)

    response = await send_request(api_client, HTTPMethod.GET, "tournaments/999")
    assert response.status_code == 404
    assert response.json() == {"detail": "Could not find tournament with the given id"}

    response = await send_request(
        api_client, HTTPMethod.POST, "participants", {"name": "player 1"}
    )
    assert response.status_code == 409
    assert response.json() == {"detail": "A participant with this name already exists"}

    response = await send_request(
        api_client,
        HTTPMethod.POST,
        "tournaments",
        {"name": "Broken Cup", "balance_format_id": 999, "participant_ids": participant_ids},
    )
    assert response.status_code == 400
    assert response.json() == {"detail": "Unknown balance format"}

    response = await send_request(
        api_client,
        HTTPMethod.POST,
        "duels",
        {
            "participant1_id": participant_ids[0],
            "participant2_id": participant_ids[1],
            "participant1_score": 2,
            "participant2_score": 2,
        },
    )
    assert response.status_code == 400

    duel = await send_request_for_data(
        api_client,
        HTTPMethod.POST,
        "duels",
        {
            "participant1_id": participant_ids[0],
            "participant2_id": participant_ids[1],
            "participant1_score": 1,
            "participant2_score": 3,
        },
    )
    assert duel["winner_id"] == participant_ids[1]

    response = await send_request(
        api_client,
        HTTPMethod.POST,
        f"matches/{duel['id']}/resolve",
        {"participant1_score": 3, "participant2_score": 0},
    )
    assert response.status_code == 400
    assert response.json() == {"detail": "Match has already been played"}

    response = await send_request(
        api_client,
        HTTPMethod.POST,
        "matches/999/resolve",
        {"participant1_score": 3, "participant2_score": 0},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_league_standings_and_configuration(api_client: AsyncClient) -> None:
    league = await send_request_for_data(
        api_client, HTTPMethod.POST, "leagues", {"name": "Neighbourhood League"}
    )
    duel = await send_request_for_data(
        api_client,
        HTTPMethod.POST,
        "duels/by_name",
        {
            "league_id": league["id"],
            "participant1_name": "Aiger",
            "participant2_name": "Shu",
            "participant1_score": 4,
            "participant2_score": 2,
        },
    )

    league = await send_request_for_data(api_client, HTTPMethod.GET, f"leagues/{league['id']}")
    assert league["participant_ids"] == [duel["participant1_id"], duel["participant2_id"]]

    league_matches = await send_request_for_data(
        api_client, HTTPMethod.GET, f"leagues/{league['id']}/matches"
    )
    assert [match["id"] for match in league_matches] == [duel["id"]]

    standings = await send_request_for_data(api_client, HTTPMethod.GET, "standings")
    assert [row["name"] for row in standings] == ["Aiger", "Shu"]

    app_config = await send_request_for_data(
        api_client,
        HTTPMethod.PUT,
        "config/scoring_system",
        {"win": 3, "loss": 0},
    )
    assert app_config["scoring_system"] == {"win": 3, "loss": 0}

    standings = await send_request_for_data(
        api_client, HTTPMethod.GET, f"standings?scope=LEAGUE&league_id={league['id']}"
    )
    assert [(row["name"], row["points"]) for row in standings] == [("Aiger", 3), ("Shu", 0)]

    response = await send_request(api_client, HTTPMethod.GET, "standings?scope=LEAGUE")
    assert response.status_code == 400
    assert response.json() == {"detail": "A league id is required for league standings"}
