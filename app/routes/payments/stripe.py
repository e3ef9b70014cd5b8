from flask import Blueprint, request, jsonify, current_app
from http import HTTPStatus
import logging
from app.extensions.extension import db
from app.models.payment import Payment
from app.routes.payments.payment_utils import validate_checkout_input
from app.routes.user.user_utils import get_json_body, require_valid, handle_errors
from app.utils.auth import token_required
import stripe

logger = logging.getLogger(__name__)

checkout_bp = Blueprint('checkout', __name__)

@checkout_bp.route('/pay', methods=['POST'])
@token_required
@handle_errors
def create_checkout_session(current_user):
    """Record a pending payment and open a Stripe Checkout session for it.

    The ?transaction= query parameter names the transaction being paid so
    the success and cancel URLs can send the buyer back to it.
    """
    data = get_json_body()
    require_valid(validate_checkout_input(data))

    currency = data.get('currency') or 'usd'
    transaction_id = request.args.get('transaction', '')

    payment = Payment(
        user_id=current_user.user_id,
        amount=data['amount'],
        method=data.get('method') or 'stripe',
        status=1
    )
    db.session.add(payment)
    db.session.commit()

    stripe_secret_key = current_app.config.get('STRIPE_SECRET_KEY')
    if not stripe_secret_key:
        return jsonify({'error': 'Stripe secret key not configured'}), HTTPStatus.INTERNAL_SERVER_ERROR

    stripe.api_key = stripe_secret_key
    frontend_url = current_app.config['FRONTEND_URL']
    return_url = f"{frontend_url}/member/transactions/buy/{transaction_id}?payment={payment.payment_id}"

    # Stripe uses the smallest currency unit
    unit_amount = int(round(float(data['amount']) * 100))

    try:
        checkout_session = stripe.checkout.Session.create(
            payment_method_types=['card'],
            line_items=[{
                'price_data': {
                    'currency': currency,
                    'product_data': {
                        'name': data.get('description') or f'Transaction {transaction_id}',
                    },
                    'unit_amount': unit_amount,
                },
                'quantity': 1,
            }],
            mode='payment',
            success_url=f'{return_url}&payment_status=success',
            cancel_url=f'{return_url}&payment_status=cancel',
            client_reference_id=payment.payment_id,
            metadata={
                'user_id': current_user.user_id,
                'payment_id': payment.payment_id,
                'transaction_id': transaction_id,
            },
        )
    except stripe.StripeError as e:
        logger.error(f"Error creating checkout session for payment {payment.payment_id}: {str(e)}")
        return jsonify({'error': f'Error creating checkout session: {str(e)}'}), HTTPStatus.INTERNAL_SERVER_ERROR

    logger.info(f"Checkout session {checkout_session.id} opened for payment {payment.payment_id}")

    return jsonify({
        'payment_id': payment.payment_id,
        'checkout_url': checkout_session.url
    }), HTTPStatus.OK
