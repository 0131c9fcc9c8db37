from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user
from arcade import db
from arcade.auth import create_token
from arcade.models import User
from arcade.repositories import user_repository

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the arcade score server!'})

@main.route('/api/auth/register', methods=['POST'])
def register():
    data = request.get_json(silent=True) or {}
    if not data.get('username') or not data.get('password'):
        return jsonify({'success': False, 'message': 'Missing username or password'}), 400

    if User.query.filter_by(name=data['username']).first():
        return jsonify({'success': False, 'message': 'Username already exists'}), 400

    user = User(
        name=data['username'],
        avatar=data.get('avatar') or f"https://api.dicebear.com/8.x/bottts/svg?seed={data['username']}",
        birthday=data.get('birthday'),
    )
    user.set_password(data['password'])
    db.session.add(user)
    db.session.commit()
    current_app.logger.info(f"[auth] registered user={user.id}")

    return jsonify({'success': True, 'user': user.to_dict(), 'token': create_token(user)}), 201

@main.route('/api/auth/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    user = User.query.filter_by(name=data.get('username')).first()
    if user and user.check_password(data.get('password') or ''):
        return jsonify({'success': True, 'user': user.to_dict(), 'token': create_token(user)})
    return jsonify({'success': False, 'message': 'Invalid username or password'}), 401

@main.route('/api/auth/me')
@login_required
def me():
    return jsonify({'success': True, 'user': current_user.to_dict()})

@main.route('/api/users/<string:user_id>/transactions')
@login_required
def transactions(user_id):
    if current_user.id != user_id and not current_user.is_master:
        return jsonify({'success': False, 'message': '권한이 없습니다.'}), 403
    if user_repository.get_user(user_id) is None:
        return jsonify({'success': False, 'message': 'User not found'}), 404
    return jsonify({'success': True, 'transactions': user_repository.get_transactions(user_id)})
