import pytest
from fastapi import WebSocketDisconnect
from fastapi.testclient import TestClient

from helpers import API, auth_headers, token_for

from sportmate.core.config import Settings
from sportmate.main import create_app


def _direct_room(client, user, other):
    return client.post(f"{API}/chat/rooms/direct/{other.id}", headers=auth_headers(user)).json()["id"]


def _send(websocket, room_id, sender_id, content):
    websocket.send_json(
        {
            "event": "send_message",
            "data": {
                "roomId": room_id,
                "content": content,
                "senderId": sender_id,
                "timestamp": "2026-05-01T18:30:00Z",
            },
        }
    )


def test_connection_without_token_is_refused(client):
    with pytest.raises(WebSocketDisconnect) as excinfo:
        with client.websocket_connect("/ws"):
            pass

    assert excinfo.value.code == 1008


def test_connection_with_invalid_token_is_refused(client):
    with pytest.raises(WebSocketDisconnect) as excinfo:
        with client.websocket_connect("/ws?token=not-a-jwt"):
            pass

    assert excinfo.value.code == 1008


def test_message_round_trip_between_two_clients(client, make_user):
    alice, bob = make_user(), make_user()
    room_id = _direct_room(client, alice, bob)

    with client.websocket_connect(f"/ws?token={token_for(bob)}") as bob_ws:
        bob_ws.send_json({"event": "join_room", "data": {"roomId": room_id}})
        _send(bob_ws, room_id, bob.id, "anyone up for a match?")
        assert bob_ws.receive_json()["data"]["content"] == "anyone up for a match?"

        with client.websocket_connect(
            "/ws", headers={"Authorization": f"Bearer {token_for(alice)}"}
        ) as alice_ws:
            alice_ws.send_json({"event": "join_room", "data": {"roomId": room_id}})
            _send(alice_ws, room_id, alice.id, "count me in")

            echoed = alice_ws.receive_json()
            delivered = bob_ws.receive_json()

            assert echoed == delivered
            assert echoed["event"] == "new_message"
            assert echoed["data"]["senderId"] == alice.id

            alice_ws.send_json(
                {
                    "event": "mark_message_read",
                    "data": {"messageId": delivered["data"]["id"], "userId": bob.id},
                }
            )
            assert alice_ws.receive_json() == {
                "event": "error",
                "data": {"message": "userId does not match the authenticated user"},
            }

            bob_ws.send_json(
                {
                    "event": "mark_message_read",
                    "data": {"messageId": delivered["data"]["id"], "userId": bob.id},
                }
            )
            receipt = {
                "event": "message_read",
                "data": {"messageId": delivered["data"]["id"], "userId": bob.id},
            }
            assert bob_ws.receive_json() == receipt
            assert alice_ws.receive_json() == receipt

    history = client.get(f"{API}/chat/rooms/{room_id}/messages", headers=auth_headers(alice)).json()
    assert [message["content"] for message in history] == ["anyone up for a match?", "count me in"]
    assert history[1]["isRead"] is True


def test_non_json_frame_is_reported(client, make_user):
    user = make_user()

    with client.websocket_connect(f"/ws?token={token_for(user)}") as websocket:
        websocket.send_text("hello")
        assert websocket.receive_json() == {
            "event": "error",
            "data": {"message": "Frames must be JSON objects"},
        }


def test_disconnect_clears_presence(client, app, make_user):
    alice, bob = make_user(), make_user()
    room_id = _direct_room(client, alice, bob)

    with client.websocket_connect(f"/ws?token={token_for(alice)}") as websocket:
        websocket.send_json({"event": "join_room", "data": {"roomId": room_id}})
        _send(websocket, room_id, alice.id, "ping")
        websocket.receive_json()
        assert len(app.state.room_registry.members(room_id)) == 1

    assert app.state.room_registry.members(room_id) == set()


class FastHeartbeatSettings(Settings):
    HEARTBEAT_INTERVAL_SECONDS = 0.05


def test_idle_connection_receives_heartbeat(engine, make_user):
    app = create_app(engine=engine, app_settings=FastHeartbeatSettings())
    user = make_user()

    with TestClient(app) as test_client:
        with test_client.websocket_connect(f"/ws?token={token_for(user)}") as websocket:
            frame = websocket.receive_json()

    assert frame["event"] == "heartbeat"
    assert "timestamp" in frame["data"]
