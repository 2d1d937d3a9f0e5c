"""
Public snapshot serialization of a Game.

Produces a JSON-friendly view of the table for renderers: players, tile
ownership and whose turn it is.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from hotseat.game import Game


def serialize_snapshot(game: "Game") -> Dict[str, Any]:
    """Serialize a Game into a stable JSON dict.

    The snapshot includes:
    - phase, turn_number and current_player_id
    - last_roll (or None)
    - players with public info (money, position, jail, owned tiles with status)
    - every tile with its type and owner
    """
    board = game.board
    started = bool(board.tiles) and bool(game.turns.players)

    players: List[Dict[str, Any]] = []
    for player in game.players:
        props: List[Dict[str, Any]] = []
        for tile_id in sorted(player.properties):
            tile = board.get_tile(tile_id)
            econ = tile.economics
            props.append(
                {
                    "id": tile.id,
                    "name": tile.name,
                    "color": tile.color,
                    "houses": econ.houses if econ else 0,
                    "hotel": econ.hotel if econ else False,
                    "mortgaged": econ.mortgaged if econ else False,
                }
            )

        players.append(
            {
                "id": player.id,
                "nick": player.nick,
                "country": player.country,
                "token_color": player.token_color,
                "money": player.money,
                "position": player.position,
                "in_jail": player.in_jail,
                "jail_turns": player.jail_turns,
                "properties": props,
            }
        )

    tiles = [
        {
            "id": tile.id,
            "name": tile.name,
            "type": tile.type.value,
            "color": tile.color,
            "owner_id": tile.owner_id,
        }
        for tile in board.tiles
    ]

    last_roll = None
    if game.last_roll is not None:
        last_roll = {"d1": game.last_roll.d1, "d2": game.last_roll.d2, "total": game.last_roll.total}

    return {
        "phase": game.phase.value,
        "turn_number": game.turns.turn_number,
        "current_player_id": game.current_player().id if started else None,
        "last_roll": last_roll,
        "players": players,
        "tiles": tiles,
    }
