from wg_builder.models import InterfaceSettings, ServerIdentity, SetEndpoint
from wg_builder.registry import PeerRegistry
from wg_builder.session import ConfigSession


def test_initial_text_rendered(session):
    assert session.config_text.startswith("[Interface]\nAddress = 10.0.0.1/24\n")
    assert "ListenPort = 51820\n" in session.config_text


def test_text_follows_registry_changes(session):
    reg = session.registry
    peer = reg.add_peer()
    assert "[Peer]" not in session.config_text

    reg.generate_keys_for(peer.id)
    assert f"PublicKey = {peer.public_key}" in session.config_text

    reg.update_peer(peer.id, SetEndpoint("h.example:51820"))
    assert "Endpoint = h.example:51820" in session.config_text

    reg.set_server_keys()
    assert f"PrivateKey = {session.server.private_key}" in session.config_text

    reg.remove_peer(peer.id)
    assert "[Peer]" not in session.config_text


def test_toggle_off_and_on_restores_block(session):
    reg = session.registry
    peer = reg.add_peer()
    reg.generate_keys_for(peer.id)
    with_peer = session.config_text

    reg.toggle_enabled(peer.id)
    assert "[Peer]" not in session.config_text

    reg.toggle_enabled(peer.id)
    assert session.config_text == with_peer


def test_update_interface():
    session = ConfigSession(settings=InterfaceSettings(address="10.9.0.1/24"))
    assert "Address = 10.9.0.1/24" in session.config_text

    session.update_interface(listen_port=51821, interface="wg1")

    assert session.settings.listen_port == "51821"
    assert session.settings.interface == "wg1"
    assert "ListenPort = 51821\n" in session.config_text
    assert "Address = 10.9.0.1/24" in session.config_text


def test_empty_registry_is_kept():
    registry = PeerRegistry(server=ServerIdentity("SRV=", "PUB="), peer_counter=3)
    session = ConfigSession(registry=registry)

    assert session.registry is registry
    assert "PrivateKey = SRV=\n" in session.config_text
    assert session.registry.add_peer().id == 4
