from flask import Flask
from flask_migrate import Migrate
from flask_cors import CORS
from app.extensions.extension import jwt, db

# Initialize migrate with the imported db
migrate = Migrate()

def create_app(config_name='default', test_config=None):
    from app.config import config_by_name

    # Initialize app
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    if test_config:
        app.config.update(test_config)

    CORS(app, resources={r"/*": {
        "origins": app.config['CORS_ORIGINS'].split(','),
        "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization"],
        "supports_credentials": True
    }})

    # Initialize extensions with app
    db.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)

    # Import JWT utils to register the loaders
    from app.utils import jwt_utils

    # Register blueprints
    from app.routes.auth.auth import auth_bp
    from app.routes.user.user import user_bp
    from app.routes.products.products import products_bp
    from app.routes.addresses.addresses import addresses_bp
    from app.routes.payments.payments import payments_bp
    from app.routes.payments.stripe import checkout_bp
    from app.routes.transactions.transactions import transactions_bp
    from app.routes.withdrawals.withdrawals import withdrawals_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(addresses_bp)
    app.register_blueprint(payments_bp)
    app.register_blueprint(checkout_bp)
    app.register_blueprint(transactions_bp)
    app.register_blueprint(withdrawals_bp)

    @app.route('/')
    def index():
        return "Welcome to the Flexcrow API"

    from app.models.user import User
    from app.models.product import Product
    from app.models.address import Address
    from app.models.payment import Payment
    from app.models.transaction import Transaction
    from app.models.withdrawal import Withdrawal

    # Create database tables
    with app.app_context():
        db.create_all()

    return app

# Function to drop all tables (for reset operations)
def drop_all_tables(config_name='default'):
    with create_app(config_name).app_context():
        db.drop_all()
