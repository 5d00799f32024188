from flask import Blueprint, jsonify

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return 'duel-game backend running'


@main.route('/healthz')
def healthz():
    return jsonify({'ok': True}), 200
