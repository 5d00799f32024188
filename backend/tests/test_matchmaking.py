from duel.services.match.matchmaking import MatchQueue


def test_pairs_oldest_first():
    queue = MatchQueue()
    queue.enqueue('p1')
    assert queue.try_pair() is None
    queue.enqueue('p2')
    queue.enqueue('p3')
    assert queue.try_pair() == ('p1', 'p2')
    assert list(queue._waiting) == ['p3']
    queue.enqueue('p4')
    assert queue.try_pair() == ('p3', 'p4')
    assert len(queue) == 0


def test_duplicate_enqueue_keeps_order():
    queue = MatchQueue()
    assert queue.enqueue('p1')
    assert queue.enqueue('p2')
    assert not queue.enqueue('p1')
    assert queue.try_pair() == ('p1', 'p2')


def test_remove_is_idempotent():
    queue = MatchQueue()
    queue.enqueue('p1')
    queue.enqueue('p2')
    assert queue.remove('p1')
    assert not queue.remove('p1')
    assert not queue.remove('ghost')
    assert 'p2' in queue
    assert queue.try_pair() is None


def test_lobby_fair_pairing(make_lobby, catalog_of, outbox):
    lobby = make_lobby(catalog_of({'power': 5}, {'power': 3}))

    assert lobby.join_queue('p1') is None
    first = lobby.join_queue('p2')
    assert first.players == ('p1', 'p2')
    assert lobby.join_queue('p3') is None
    second = lobby.join_queue('p4')
    assert second.players == ('p3', 'p4')
    assert first.room_id != second.room_id

    assert outbox.events('p1', 'match:found') == [{'roomId': first.room_id, 'youAre': 1}]
    assert outbox.events('p2', 'match:found') == [{'roomId': first.room_id, 'youAre': 2}]
    assert outbox.events('p3', 'match:found') == [{'roomId': second.room_id, 'youAre': 1}]
    # Each participant gets the opening snapshot right after match:found
    assert [event for sid, event, _ in outbox.sent if sid == 'p1'] == ['match:found', 'game:state']


def test_lobby_ignores_duplicate_join(make_lobby, catalog_of, outbox):
    lobby = make_lobby(catalog_of({'power': 5}, {'power': 3}))
    lobby.join_queue('p1')
    assert lobby.join_queue('p1') is None
    assert len(lobby.queue) == 1
    assert outbox.sent == []


def test_disconnect_while_waiting_leaves_queue(make_lobby, catalog_of):
    lobby = make_lobby(catalog_of({'power': 5}, {'power': 3}))
    lobby.join_queue('p1')
    assert lobby.disconnect('p1') == []
    assert lobby.disconnect('p1') == []
    assert lobby.join_queue('p2') is None
    assert lobby.join_queue('p3').players == ('p2', 'p3')
