from models.user import User


def test_create_admin_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-admin', '--email', 'Root@Example.com', '--password', 'secret123'])
    assert result.exit_code == 0, result.output
    assert 'Admin ready' in result.output
    user = User.query.filter_by(email='root@example.com').one()
    assert user.role == 'admin'


def test_create_admin_promotes_existing_user(app, client):
    client.post('/api/users', json={'name': 'Ravi', 'email': 'ravi@example.com', 'password': 'secret123'})
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-admin', '--email', 'ravi@example.com', '--password', 'whatever1'])
    assert result.exit_code == 0, result.output
    assert User.query.filter_by(email='ravi@example.com').one().role == 'admin'


def test_create_admin_rejects_short_password(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-admin', '--email', 'x@example.com', '--password', '123'])
    assert result.exit_code != 0
    assert User.query.count() == 0
