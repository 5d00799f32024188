def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert b'duel-game backend running' in res.data


def test_healthz(client):
    res = client.get('/healthz')
    assert res.status_code == 200
    assert res.get_json() == {'ok': True}


def test_cors_header(client):
    res = client.get('/healthz', headers={'Origin': 'http://example.com'})
    assert res.headers.get('Access-Control-Allow-Origin') in ('*', 'http://example.com')


def test_catalog_check_command(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['catalog-check'])
    assert result.exit_code == 0
    assert 'cards' in result.output


def test_catalog_check_rejects_bad_file(flask_app, tmp_path):
    path = tmp_path / 'cards.json'
    path.write_text('not json', encoding='utf-8')
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['catalog-check', str(path)])
    assert result.exit_code != 0
    assert 'invalid JSON' in result.output


def test_parse_origins():
    from duel import parse_origins
    assert parse_origins('*') == '*'
    assert parse_origins('') == '*'
    assert parse_origins('http://a.test, http://b.test') == ['http://a.test', 'http://b.test']
