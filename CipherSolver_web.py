import math
import os

from flask import Flask, request, jsonify

from CipherSolver import (
    normalize,
    caesar_encrypt,
    caesar_decrypt,
    vigenere_encrypt,
    vigenere_decrypt,
    attack_caesar,
)

app = Flask(__name__)

# ==================== CONFIGURATION ====================
app.config['MAX_MESSAGE_LENGTH'] = int(os.environ.get('MAX_MESSAGE_LENGTH', 100000))
app.config['DEFAULT_CAESAR_SHIFT'] = int(os.environ.get('DEFAULT_CAESAR_SHIFT', 3))

CIPHERS = {
    "caesar": (caesar_encrypt, caesar_decrypt),
    "vigenere": (vigenere_encrypt, vigenere_decrypt),
}


class InputError(Exception):
    def __init__(self, message, status=400):
        super().__init__(message)
        self.message = message
        self.status = status


@app.errorhandler(InputError)
def handle_bad_request(e):
    app.logger.warning("Rejected %s %s: %s", request.method, request.path, e.message)
    return jsonify({"result": f"Error: {e.message}"}), e.status

# ==================== REQUEST HELPERS ====================

def read_message():
    text = request.form.get("message", "")
    if not text:
        raise InputError("Message is empty")
    if len(text) > app.config['MAX_MESSAGE_LENGTH']:
        raise InputError("Message is too long", status=413)
    return text

def read_shift():
    raw = request.form.get("shift", "").strip()
    if not raw:
        return app.config['DEFAULT_CAESAR_SHIFT']
    try:
        return int(raw)
    except ValueError:
        raise InputError(f"Shift must be an integer, got '{raw}'")

def run_cipher(decrypt):
    text = read_message()
    name = request.form.get("cipher", "caesar").strip().lower()
    if name not in CIPHERS:
        raise InputError(f"Unknown cipher '{name}'")

    func = CIPHERS[name][1 if decrypt else 0]
    response = {"cipher": name}
    if name == "caesar":
        response["result"] = func(text, read_shift())
    else:
        keyword = request.form.get("keyword", "")
        response["result"] = func(text, keyword)
        if len(normalize(keyword)) == 0:
            response["warning"] = "Keyword has no letters; text returned unchanged."
    return jsonify(response)

# ==================== Flask Routes ====================

@app.route("/encrypt", methods=["POST"])
def encrypt():
    return run_cipher(decrypt=False)

@app.route("/decrypt", methods=["POST"])
def decrypt():
    return run_cipher(decrypt=True)

@app.route("/solve", methods=["POST"])
def solve():
    text = read_message()
    best = attack_caesar(text)
    score = best["score"]
    app.logger.info("Solved Caesar ciphertext with shift %d", best["shift"])
    return jsonify({
        "result": best["plaintext"],
        "shift": best["shift"],
        # JSON has no infinity; no letters means nothing was scored
        "score": None if math.isinf(score) else round(score, 6),
    })

if __name__ == "__main__":
    app.run(debug=os.environ.get('FLASK_DEBUG') == '1')
