import smtplib
from types import SimpleNamespace
from unittest import mock

import stripe


def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    assert response.get_json() == {'status': 'ok'}


def test_checkout_returns_url(client, stripe_session):
    with mock.patch('stripe.checkout.Session.create', return_value=stripe_session) as create:
        response = client.post('/api/checkout', json={
            'productId': 'verume',
            'quantity': 2,
            'addOnSelected': True,
            'addOnQuantity': 3,
        })

    assert response.status_code == 200
    assert response.get_json() == {'url': 'https://pay.example/sess_123'}
    line_items = create.call_args.kwargs['line_items']
    assert [item['quantity'] for item in line_items] == [2, 3]


def test_checkout_accepts_legacy_field_names(client, stripe_session):
    with mock.patch('stripe.checkout.Session.create', return_value=stripe_session) as create:
        response = client.post('/api/checkout', json={
            'productId': 'verume',
            'qty': 1,
            'lightModule': False,
            'lightQty': 0,
        })

    assert response.status_code == 200
    assert len(create.call_args.kwargs['line_items']) == 1


def test_checkout_without_body_buys_one_default_item(client, stripe_session):
    with mock.patch('stripe.checkout.Session.create', return_value=stripe_session) as create:
        response = client.post('/api/checkout')

    assert response.status_code == 200
    line_items = create.call_args.kwargs['line_items']
    assert line_items[0]['quantity'] == 1
    assert len(line_items) == 1


def test_checkout_uses_origin_header(client, stripe_session):
    with mock.patch('stripe.checkout.Session.create', return_value=stripe_session) as create:
        client.post('/api/checkout', json={}, headers={'Origin': 'https://xatom.space'})

    assert create.call_args.kwargs['success_url'] == 'https://xatom.space/success'
    assert create.call_args.kwargs['cancel_url'] == 'https://xatom.space/cancel'


def test_checkout_rejects_out_of_range_quantity(client):
    with mock.patch('stripe.checkout.Session.create') as create:
        response = client.post('/api/checkout', json={'productId': 'verume', 'quantity': 100})

    assert response.status_code == 400
    assert 'quantity' in response.get_json()['error']
    create.assert_not_called()


def test_checkout_rejects_selected_add_on_without_quantity(client):
    response = client.post('/api/checkout', json={'addOnSelected': True, 'addOnQuantity': 0})
    assert response.status_code == 400


def test_checkout_unknown_product(client):
    response = client.post('/api/checkout', json={'productId': 'chair'})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Unknown product.'}


def test_checkout_invalid_json(client):
    response = client.post('/api/checkout', data='{not json', content_type='application/json')
    assert response.status_code == 400
    assert response.get_json() == {'error': 'Invalid JSON'}


def test_checkout_not_configured(app, client):
    app.checkout_service.secret_key = None
    response = client.post('/api/checkout', json={})
    assert response.status_code == 500
    assert 'Stripe is not configured' in response.get_json()['error']


def test_checkout_session_without_url(client):
    with mock.patch('stripe.checkout.Session.create', return_value=SimpleNamespace(id='cs_1', url='')):
        response = client.post('/api/checkout', json={})

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to create checkout session.'}


def test_checkout_provider_error(client):
    with mock.patch('stripe.checkout.Session.create', side_effect=stripe.StripeError('down')):
        response = client.post('/api/checkout', json={})

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to create checkout session.'}


def test_contact_requires_all_fields(client):
    response = client.post('/api/contact', json={'name': 'Mina', 'email': 'mina@example.com', 'message': '   '})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'All fields are required.'}


def test_contact_missing_field(client):
    response = client.post('/api/contact', json={'name': 'Mina'})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'All fields are required.'}


def test_contact_too_long_field(client):
    response = client.post('/api/contact', json={'name': 'Mina', 'email': 'mina@example.com', 'message': 'x' * 5001})
    assert response.status_code == 400
    assert response.get_json() == {'error': 'message is too long (max 5000 characters).'}


def test_contact_logged_when_transport_not_configured(client):
    response = client.post('/api/contact', json={
        'name': 'Mina',
        'email': 'mina@example.com',
        'message': 'Hello',
    })
    assert response.status_code == 200
    assert response.get_json() == {'message': 'Message sent.'}


def test_contact_transport_failure(app, client):
    app.mail_service.user = 'studio@gmail.com'
    app.mail_service.password = 'app-password'
    with mock.patch('smtplib.SMTP_SSL', side_effect=smtplib.SMTPConnectError(421, b'unavailable')):
        response = client.post('/api/contact', json={
            'name': 'Mina',
            'email': 'mina@example.com',
            'message': 'Hello',
        })

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to send message.'}


def test_quote(client):
    response = client.get('/api/quote?productId=verume&quantity=2&addOnSelected=true&addOnQuantity=3')
    assert response.status_code == 200
    assert response.get_json() == {
        'productId': 'verume',
        'baseSubtotal': 496000,
        'addOnSubtotal': 87000,
        'total': 583000,
        'formatted': '583,000',
    }


def test_quote_ignores_unselected_add_on(client):
    response = client.get('/api/quote?quantity=3&addOnQuantity=7')
    assert response.get_json()['total'] == 744000


def test_quote_out_of_range(client):
    response = client.get('/api/quote?quantity=0')
    assert response.status_code == 400


def test_cors_header_on_api(client):
    response = client.get('/api/health', headers={'Origin': 'https://example.com'})
    assert response.headers.get('Access-Control-Allow-Origin') == '*'


def test_cors_preflight_on_api(client):
    response = client.options('/api/checkout', headers={
        'Origin': 'https://example.com',
        'Access-Control-Request-Method': 'POST',
    })
    assert response.headers.get('Access-Control-Allow-Origin') == '*'
