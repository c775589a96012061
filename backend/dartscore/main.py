from flask import Blueprint, jsonify

main = Blueprint('main', __name__)

@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the darts scoring server!'})

@main.route('/api/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})
