from flask import Blueprint, request, jsonify, current_app
from flask_login import login_user, logout_user, login_required, current_user
from paytoplay import db
from paytoplay.models import Account

main = Blueprint('main', __name__)


def _is_reserved(account_id) -> bool:
    # The contract identity confirms payouts and is never a user account
    return account_id == current_app.config.get('CONTRACT_ACCOUNT_ID')


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the pay-to-play lottery!'})

@main.route('/register', methods=['POST', 'OPTIONS'])
def register():
    if request.method == 'OPTIONS':
        return jsonify({'status': 'ok'}), 200
    data = request.get_json(silent=True) or {}
    account_id = (data.get('account_id') or '').strip()
    password = data.get('password')
    if not account_id or not password:
        return jsonify({'error': 'Missing account_id or password'}), 400
    if _is_reserved(account_id):
        current_app.logger.info(f"[register] refused reserved account_id={account_id}")
        return jsonify({'error': 'This account id is reserved'}), 403

    if Account.query.filter_by(account_id=account_id).first():
        return jsonify({'error': 'Account already exists'}), 400

    account = Account(account_id=account_id)
    account.set_password(password)
    db.session.add(account)
    db.session.commit()
    login_user(account)
    return jsonify({'success': True, 'account': account.to_dict()}), 201

@main.route('/login', methods=['POST', 'OPTIONS'])
def login():
    if request.method == 'OPTIONS':
        return jsonify({'status': 'ok'}), 200
    data = request.get_json(silent=True) or {}
    if _is_reserved(data.get('account_id')):
        return jsonify({'error': 'Invalid account or password'}), 401
    account = Account.query.filter_by(account_id=data.get('account_id')).first()
    if account and account.check_password(data.get('password') or ''):
        login_user(account, remember=True)
        return jsonify({'success': True, 'account': account.to_dict()})
    return jsonify({'error': 'Invalid account or password'}), 401

@main.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify({'account': current_user.to_dict()})

@main.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True})
