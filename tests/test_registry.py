from unittest.mock import patch

import pytest

from wg_builder.models import (
    Peer,
    ServerIdentity,
    SetAllowedIPs,
    SetEndpoint,
    SetName,
    SetPersistentKeepalive,
)
from wg_builder.registry import PeerRegistry


def test_add_peer_defaults(registry):
    peer = registry.add_peer()

    assert peer.id == 1
    assert peer.name == "Peer 1"
    assert peer.private_key == ""
    assert peer.public_key == ""
    assert peer.allowed_ips == "10.0.0.2/32"
    assert peer.endpoint == ""
    assert peer.persistent_keepalive == 25
    assert peer.enabled is True
    assert registry.peers == (peer,)


def test_ids_increase_and_are_never_reused(registry):
    seen = []
    for _ in range(3):
        seen.append(registry.add_peer().id)
    registry.remove_peer(3)
    registry.remove_peer(1)
    seen.append(registry.add_peer().id)
    seen.append(registry.add_peer().id)

    assert seen == [1, 2, 3, 4, 5]
    assert [p.id for p in registry] == [2, 4, 5]
    assert registry.get(5).allowed_ips == "10.0.0.6/32"


def test_allowed_ips_not_recomputed_after_edit(registry):
    peer = registry.add_peer()
    registry.update_peer(peer.id, SetName("laptop"))
    assert peer.allowed_ips == "10.0.0.2/32"


def test_remove_unknown_id_is_noop(registry):
    registry.add_peer()
    before = registry.peers
    calls = []
    registry.subscribe(calls.append)

    registry.remove_peer(42)

    assert registry.peers == before
    assert calls == []


def test_generate_keys_for(registry):
    peer = registry.add_peer()
    registry.generate_keys_for(peer.id)

    assert len(peer.private_key) == 44
    assert len(peer.public_key) == 44
    assert peer.private_key != peer.public_key


def test_generate_keys_for_unknown_id_is_noop(registry):
    registry.generate_keys_for(7)
    assert len(registry) == 0


def test_update_peer_variants(registry):
    peer = registry.add_peer()
    registry.update_peer(peer.id, SetEndpoint("vpn.example.com:51820"))
    registry.update_peer(peer.id, SetAllowedIPs("10.0.0.0/24"))
    registry.update_peer(peer.id, SetPersistentKeepalive(0))

    assert peer.endpoint == "vpn.example.com:51820"
    assert peer.allowed_ips == "10.0.0.0/24"
    assert peer.persistent_keepalive == 0


def test_update_field_accepts_both_spellings(registry):
    peer = registry.add_peer()
    registry.update_field(peer.id, "allowedIPs", "192.168.1.0/24")
    registry.update_field(peer.id, "persistent_keepalive", 10)

    assert peer.allowed_ips == "192.168.1.0/24"
    assert peer.persistent_keepalive == 10


def test_update_field_unknown_id_is_noop(registry):
    registry.update_field(99, "name", "ghost")
    assert len(registry) == 0


def test_update_field_unknown_field_raises(registry):
    peer = registry.add_peer()
    with pytest.raises(ValueError):
        registry.update_field(peer.id, "colour", "blue")


@pytest.mark.parametrize("value", [-1, "25", 2.5, True])
def test_keepalive_must_be_non_negative_int(registry, value):
    peer = registry.add_peer()
    with pytest.raises(ValueError):
        registry.update_field(peer.id, "persistentKeepalive", value)
    assert peer.persistent_keepalive == 25


def test_toggle_enabled(registry):
    peer = registry.add_peer()
    registry.toggle_enabled(peer.id)
    assert peer.enabled is False
    assert peer in registry.peers
    registry.toggle_enabled(peer.id)
    assert peer.enabled is True


def test_toggle_unknown_id_is_noop(registry):
    registry.toggle_enabled(3)
    assert len(registry) == 0


def test_order_is_creation_order(registry):
    a = registry.add_peer()
    b = registry.add_peer()
    c = registry.add_peer()
    registry.update_peer(a.id, SetName("zzz"))
    registry.toggle_enabled(b.id)
    assert [p.id for p in registry] == [a.id, b.id, c.id]


def test_set_server_keys_keeps_same_identity(registry):
    server = registry.server
    assert server.private_key == "" and server.public_key == ""

    returned = registry.set_server_keys()

    assert returned is server
    assert len(server.private_key) == 44
    assert len(server.public_key) == 44


def test_listeners_notified_on_each_change(registry):
    calls = []
    registry.subscribe(calls.append)

    peer = registry.add_peer()
    registry.generate_keys_for(peer.id)
    registry.update_peer(peer.id, SetName("x"))
    registry.toggle_enabled(peer.id)
    registry.set_server_keys()
    registry.remove_peer(peer.id)

    assert len(calls) == 6
    assert all(c is registry for c in calls)


def test_counter_never_below_existing_ids():
    peers = [Peer(id=4, name="Peer 4", private_key="", public_key="", allowed_ips="10.0.0.5/32")]
    registry = PeerRegistry(peers=peers, peer_counter=1, server=ServerIdentity())
    assert registry.add_peer().id == 5


def test_keys_come_from_generate_keypair(registry):
    peer = registry.add_peer()
    with patch("wg_builder.registry.keys.generate_keypair", return_value=("PRIV=", "PUB=")):
        registry.generate_keys_for(peer.id)
        registry.set_server_keys()

    assert (peer.private_key, peer.public_key) == ("PRIV=", "PUB=")
    assert registry.server == ServerIdentity("PRIV=", "PUB=")
