import os
import sys
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from models import db
from models.category import Category
from models.menu_item import MenuItem, ItemOption


@pytest.fixture(scope='session')
def app_instance():
    os.environ.setdefault('APP_ENV', 'testing')
    from app import create_app
    from app.config import TestingConfig
    return create_app(TestingConfig)


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


def obtain_token(client, email, role='user'):
    resp = client.post('/__auth/login_stub', json={'email': email, 'role': role})
    return resp.get_json()['data']['access']


def bearer(token):
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def user_headers(client):
    return bearer(obtain_token(client, 'diner@example.com'))


@pytest.fixture
def other_headers(client):
    return bearer(obtain_token(client, 'other@example.com'))


@pytest.fixture
def admin_headers(client):
    return bearer(obtain_token(client, 'boss@example.com', role='admin'))


@pytest.fixture
def courier_headers(client):
    """A role the scope registry does not know."""
    return bearer(obtain_token(client, 'courier@example.com', role='courier'))


@pytest.fixture
def menu(app):
    """Two curries and a naan, with one option on the first curry."""
    category = Category(name='Mains', description='Curries')
    db.session.add(category)
    db.session.flush()
    curry = MenuItem(category_id=category.id, name='Butter Chicken', base_price=500)
    paneer = MenuItem(category_id=category.id, name='Paneer Tikka', base_price=300)
    naan = MenuItem(category_id=category.id, name='Garlic Naan', base_price=80, is_available=False)
    db.session.add_all([curry, paneer, naan])
    db.session.flush()
    extra = ItemOption(menu_item_id=curry.id, name='Extra gravy', extra_price=50)
    db.session.add(extra)
    db.session.commit()
    return {
        'category_id': category.id,
        'curry_id': curry.id,
        'paneer_id': paneer.id,
        'naan_id': naan.id,
        'extra_id': extra.id,
    }
