from datetime import datetime, timedelta, timezone
from functools import wraps
from typing import Optional

import jwt
from flask import current_app, jsonify
from flask_login import current_user

from arcade import login_manager
from arcade.models import User


def create_token(user: User) -> str:
    cfg = current_app.config
    payload = {
        'sub': user.id,
        'isMaster': bool(user.is_master),
        'exp': datetime.now(timezone.utc) + timedelta(seconds=int(cfg.get('JWT_EXP_SECONDS', 3600))),
    }
    return jwt.encode(payload, cfg['JWT_SECRET'], algorithm=cfg.get('JWT_ALGORITHM', 'HS256'))


def decode_token(token: str) -> Optional[dict]:
    cfg = current_app.config
    try:
        return jwt.decode(token, cfg['JWT_SECRET'], algorithms=[cfg.get('JWT_ALGORITHM', 'HS256')])
    except jwt.InvalidTokenError as exc:
        current_app.logger.info(f"[auth] rejected bearer token: {exc}")
        return None


@login_manager.request_loader
def load_user_from_request(request):
    header = request.headers.get('Authorization', '')
    if not header.startswith('Bearer '):
        return None
    data = decode_token(header.split(' ', 1)[1].strip())
    if not data or not data.get('sub'):
        return None
    return User.query.filter_by(id=data['sub']).first()


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'success': False, 'message': '로그인이 필요합니다.'}), 401


def master_required(view):
    """Reject authenticated callers without the master flag. Stack under @login_required."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated or not current_user.is_master:
            return jsonify({'success': False, 'message': '권한이 없습니다.'}), 403
        return view(*args, **kwargs)
    return wrapper
