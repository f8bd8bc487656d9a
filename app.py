#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
QR Payment Generator - Flask Web Application

Builds a payment string from the form (or takes raw text), encodes it and
shows the code with the payment details printed under it.

Run:
    python app.py
Open:
    http://127.0.0.1:5000/
"""

import logging
from io import BytesIO
from typing import Tuple
from urllib.parse import urlencode

from flask import Flask, render_template_string, request, send_file

from qrpay.payment import ORGANIZATIONS, build_payment_text, payment_instruction_lines
from qrpay.qr_generator import QrSymbol, evaluate_all_masks, make_qr
from qrpay.renderer import (DEFAULT_BORDER, DEFAULT_SCALE, render_png_bytes,
                            render_png_from_symbol, render_svg_from_symbol)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEMPLATE = """
<!doctype html>
<html>
<head>
  <meta charset="utf-8">
  <title>QR Payment Generator</title>
  <style>
    body{font-family:Inter, Arial, sans-serif; padding:18px; background:#fff}
    img{display:block;margin:6px 0;border:1px solid #ccc}
    .metrics{font-size:12px;color:#333}
    .error{color:#b00;font-weight:600}
    textarea, pre{font-family:monospace}
  </style>
</head>
<body>
  <h1>QR Payment Generator</h1>

  <form method="post">
    {% for key, org in organizations.items() %}
      <label><input type="radio" name="org" value="{{key}}" {% if params.org==key %}checked{% endif %}> {{org.display_name}}</label>
    {% endfor %}
    <br>
    ФИО ребенка: <input type="text" name="fio" value="{{params.fio|e}}">
    Сумма: <input type="number" step="0.01" name="sum" value="{{params.amount|e}}">
    Назначение: <input type="text" name="purpose" value="{{params.purpose|e}}">
    <br>
    Текст (raw): <textarea name="text" rows="3" cols="90">{{text|e}}</textarea>
    <br>
    ECC:
    <select name="ecc">
      {% for level in ['L', 'M', 'Q', 'H'] %}
        <option value="{{level}}" {% if params.ecc==level %}selected{% endif %}>{{level}}</option>
      {% endfor %}
    </select>
    Version: <input type="text" name="version" size="4" value="{{params.version}}">
    Mask: <input type="text" name="mask" size="4" value="{{params.mask}}">
    Border: <input type="number" name="border" value="{{params.border}}">
    Boost ECC:
    <select name="boost_error">
      <option value="true" {% if params.boost_error %}selected{% endif %}>yes</option>
      <option value="false" {% if not params.boost_error %}selected{% endif %}>no</option>
    </select>
    <button type="submit">Generate</button>
  </form>

  {% if error %}
    <p class="error">{{error}}</p>
  {% endif %}

  {% if qr %}
    <img src="data:image/png;base64,{{qr.img_b64}}" alt="QR">
    <div class="metrics">
      version {{qr.version}} ({{qr.size}}x{{qr.size}}), ecc {{qr.ecc}}, mask {{qr.mask}},
      dark {{qr.dark_modules}}/{{qr.modules}}, functional {{qr.functional_modules}}, data {{qr.data_modules}}<br>
      best mask {{qr.best_mask}} (score {{qr.best_score}}); scores: {{qr.mask_scores_text}}
    </div>
    <pre class="payload">{{qr.payload|e}}</pre>
    <a href="/export/png?{{query}}">PNG</a> | <a href="/export/svg?{{query}}">SVG</a>
  {% endif %}
</body>
</html>
"""


def _clamp_int(raw, default: int, low: int, high: int) -> int:
    try:
        value = int(raw)
    except (ValueError, TypeError):
        return default
    return value if low <= value <= high else default


def _read_params(req) -> dict:
    """Extract and validate QR generation parameters from a Flask request."""
    return {
        'text': (req.values.get('text') or "").strip(),
        'org': (req.values.get('org') or "").strip(),
        'fio': (req.values.get('fio') or "").strip(),
        'amount': (req.values.get('sum') or "").strip(),
        'purpose': (req.values.get('purpose') or "").strip(),
        'ecc': (req.values.get('ecc') or "M").strip().upper(),
        'version': (req.values.get('version') or "auto").strip(),
        'mask': (req.values.get('mask') or "auto").strip(),
        'boost_error': (req.values.get('boost_error') or 'true') == 'true',
        'border': _clamp_int(req.values.get('border'), DEFAULT_BORDER, 0, 20),
        'scale': _clamp_int(req.values.get('scale'), DEFAULT_SCALE, 1, 40),
    }


def _payload_text(params: dict) -> str:
    """Raw text wins; otherwise the payment string for the selected organization."""
    if params['text'] or not params['org']:
        return params['text']
    return build_payment_text(params['org'], params['fio'], params['amount'], params['purpose'])


def _make_symbol(params: dict) -> Tuple[str, QrSymbol]:
    text = _payload_text(params)
    if not text:
        raise ValueError("Nothing to encode: enter the payment details or the raw text")
    logger.info(f"Generating QR code: ecc={params['ecc']}, version={params['version']}, mask={params['mask']}")
    symbol = make_qr(text, ecc=params['ecc'], version=params['version'],
                     mask=params['mask'], boost_error=params['boost_error'])
    logger.info(f"Generated QR code {symbol}")
    return text, symbol


app = Flask(__name__)


@app.route('/', methods=['GET', 'POST'])
def index():
    params = _read_params(request)
    text = params['text']
    qr_view = None
    error = None

    if request.method == 'POST':
        try:
            payload, symbol = _make_symbol(params)
        except ValueError as ex:
            error = f"Could not generate the QR code with these parameters: {ex}"
            logger.error(f"QR generation failed: {ex}")
            symbol = None

        if symbol is not None:
            b64, metrics = render_png_from_symbol(
                symbol, border=params['border'], scale=params['scale'],
                caption_lines=payment_instruction_lines(params['org'])
            )
            best_mask, best_score, scores = evaluate_all_masks(symbol)
            qr_view = dict(metrics)
            qr_view.update({
                'img_b64': b64,
                'payload': payload,
                'best_mask': best_mask,
                'best_score': best_score,
                'mask_scores_text': ", ".join(f"{k}:{v}" for k, v in sorted(scores.items())),
            })

    query = request.form.to_dict() if request.method == 'POST' else request.args.to_dict()
    return render_template_string(
        TEMPLATE, text=text, params=params, organizations=ORGANIZATIONS,
        qr=qr_view, error=error, query=urlencode(query)
    )


def _symbol_from_request():
    params = _read_params(request)
    try:
        _, symbol = _make_symbol(params)
    except ValueError as ex:
        logger.warning(f"Export failed: {ex}")
        return None, params, (str(ex), 400)
    return symbol, params, None


@app.route('/export/png', methods=['GET'])
def export_png():
    symbol, params, failure = _symbol_from_request()
    if failure:
        return failure
    png = render_png_bytes(symbol, border=params['border'], scale=params['scale'],
                           caption_lines=payment_instruction_lines(params['org']))
    return send_file(BytesIO(png), as_attachment=True, download_name='qr-code.png', mimetype='image/png')


@app.route('/export/svg', methods=['GET'])
def export_svg():
    symbol, params, failure = _symbol_from_request()
    if failure:
        return failure
    svg_bytes = render_svg_from_symbol(symbol, border=params['border'], scale=params['scale'])
    return send_file(BytesIO(svg_bytes), as_attachment=True, download_name='qr-code.svg',
                     mimetype='image/svg+xml')


if __name__ == "__main__":
    app.run(debug=True)
