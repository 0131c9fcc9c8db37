import logging
import os

from arcade import create_app, socketio

logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'INFO'))

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server to enable websockets in dev
    socketio.run(app, debug=True)
