from decimal import Decimal

from guessbet.games.models import Game


def test_health(client):
    res = client.get('/health')
    assert res.status_code == 200
    assert res.json()['status'] == 'ok'
    assert 'x-process-time' in res.headers


def test_start_game_generates_id(client):
    res = client.post('/v1/games')
    assert res.status_code == 201
    game = res.json()
    assert game['id']
    assert game['active'] is True
    assert game['players'] == {}
    assert game['correct_number'] is None


def test_start_game_with_custom_id(client):
    res = client.post('/v1/games', json={'game_id': 'room-1'})
    assert res.status_code == 201
    assert res.json()['id'] == 'room-1'

    res = client.post('/v1/games', json={'game_id': 'room-1'})
    assert res.status_code == 409
    assert res.json()['error']['code'] == 'DUPLICATE_GAME_ID'


def test_availability(client):
    client.post('/v1/games', json={'game_id': 'room-1'})
    assert client.get('/v1/games/room-1/available').json()['available'] is True
    assert client.get('/v1/games/nope/available').json()['available'] is False


def test_get_unknown_game(client):
    res = client.get('/v1/games/nope')
    assert res.status_code == 404
    assert res.json()['error']['code'] == 'GAME_NOT_FOUND'


def test_place_bet_and_end(client):
    client.post('/v1/games', json={'game_id': 'room-1'})
    res = client.post('/v1/games/room-1/bets', json={'nickname': 'emmanuel', 'number': 4, 'stake': '10'})
    assert res.status_code == 201
    bet = res.json()
    assert bet['nickname'] == 'emmanuel'
    assert bet['stake_status'] is None
    client.post('/v1/games/room-1/bets', json={'nickname': 'ada', 'number': 1, 'stake': '3'})

    res = client.post('/v1/games/room-1/end')
    assert res.status_code == 200
    game = res.json()
    assert game['active'] is False
    assert game['correct_number'] == 4
    winner = game['players'][bet['bet_id']]
    assert winner['stake_status'] == 'WIN'
    assert Decimal(winner['end_of_game_balance']) == Decimal('99')
    statuses = sorted(p['stake_status'] for p in game['players'].values())
    assert statuses == ['LOSS', 'WIN']


def test_bet_on_unknown_game(client):
    res = client.post('/v1/games/nope/bets', json={'nickname': 'emmanuel', 'number': 5, 'stake': '10'})
    assert res.status_code == 404


def test_bet_validation(client):
    client.post('/v1/games', json={'game_id': 'room-1'})
    res = client.post('/v1/games/room-1/bets', json={'nickname': 'emmanuel', 'number': 10, 'stake': '10'})
    assert res.status_code == 422
    res = client.post('/v1/games/room-1/bets', json={'nickname': 'emmanuel', 'number': 3, 'stake': '0'})
    assert res.status_code == 422


def test_timed_out_game(client, clock):
    client.post('/v1/games', json={'game_id': 'room-1'})
    clock.advance(61)

    res = client.post('/v1/games/room-1/bets', json={'nickname': 'emmanuel', 'number': 5, 'stake': '10'})
    assert res.status_code == 410
    assert res.json()['error']['code'] == 'GAME_TIMED_OUT'
    assert client.post('/v1/games/room-1/end').status_code == 410


def test_end_twice(client):
    client.post('/v1/games', json={'game_id': 'room-1'})
    assert client.post('/v1/games/room-1/end').status_code == 200
    res = client.post('/v1/games/room-1/end')
    assert res.status_code == 410
    assert res.json()['error']['details']['reason'] == 'already ended'


def test_list_games(client, registry):
    registry.start_new_game(Game('a'))
    registry.start_new_game(Game('b'))
    res = client.get('/v1/games', params={'limit': 1})
    assert res.status_code == 200
    body = res.json()
    assert body['total'] == 2
    assert [g['id'] for g in body['items']] == ['a']
    assert body['items'][0]['active'] is True
    assert body['items'][0]['players'] == {}


def test_process_time_header_on_errors(client):
    res = client.get('/v1/games/nope')
    assert res.status_code == 404
    assert res.headers['x-process-time'].endswith('s')
