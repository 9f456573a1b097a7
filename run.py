# run.py

from painel_rh import create_app, socketio

app = create_app()

if __name__ == '__main__':
    # socketio.run() em vez de app.run() para servir os eventos em tempo real
    socketio.run(app, debug=True, allow_unsafe_werkzeug=True)
