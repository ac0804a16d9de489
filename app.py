import json
import logging
import time

from flask import Flask, request, jsonify
from google import genai

import config
from blog_models import form_options
from display import SKELETON_HTML, render_view, share_payload
from form_state import Failed, GenerationSession, Idle
from gemini_service import ArticleGenerator

logger = logging.getLogger(__name__)

app = Flask(__name__)

client = genai.Client(api_key=config.require_api_key())
generator = ArticleGenerator(client)


@app.route("/")
def index():
    return HTML_PAGE.replace(
        "/*__FORM_OPTIONS__*/",
        json.dumps(form_options()),
    ).replace(
        "<!--__EMPTY_VIEW__-->",
        render_view(Idle())["html"],
    ).replace(
        "<!--__LOADING_VIEW__-->",
        SKELETON_HTML,
    )


@app.route("/api/generate", methods=["POST"])
def generate():
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400
    data = dict(data)
    request_id = data.pop("requestId", None)

    session = GenerationSession()
    try:
        session.form.update_many(data)
    except KeyError as e:
        return jsonify({"error": e.args[0], "requestId": request_id}), 400

    start = time.time()
    state = session.run(generator)
    elapsed = round(time.time() - start, 1)

    body = dict(render_view(state), requestId=request_id)
    if isinstance(state, Failed):
        body["error"] = state.message
        # no request id means the form never reached the provider
        status = 400 if state.request_id is None else 502
        return jsonify(body), status

    result = state.result
    body.update(
        article=result.article,
        images=result.images,
        share=share_payload(result.article, session.form.params.product_url),
        elapsed=elapsed,
    )
    return jsonify(body)


HTML_PAGE = r"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>AI Affiliate Blog Post Generator</title>
<style>
  *, *::before, *::after { box-sizing: border-box; margin: 0; padding: 0; }

  body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    background: #0f0f0f;
    color: #e0e0e0;
    min-height: 100vh;
  }

  header {
    padding: 16px 24px;
    border-bottom: 1px solid #1e1e1e;
  }
  header h1 { font-size: 1.2rem; font-weight: 600; color: #fff; }
  header p { font-size: 0.8rem; color: #888; margin-top: 4px; }

  .split-layout {
    display: flex;
    gap: 24px;
    padding: 24px;
    align-items: flex-start;
  }

  .form-panel {
    flex: 0 0 340px;
    display: flex;
    flex-direction: column;
    gap: 14px;
  }

  .form-panel label {
    display: block;
    font-size: 0.75rem;
    color: #888;
    margin-bottom: 6px;
  }

  input[type="text"], select {
    width: 100%;
    background: #1a1a1a;
    color: #e0e0e0;
    border: 1px solid #2a2a2a;
    border-radius: 8px;
    padding: 8px 12px;
    font-size: 0.85rem;
    font-family: inherit;
    outline: none;
    transition: border-color 0.2s;
  }
  input[type="text"]:focus, select:hover, select:focus { border-color: #8b5cf6; }
  input::placeholder { color: #555; }

  .checkbox-row { display: flex; align-items: center; gap: 10px; font-size: 0.85rem; }

  button {
    background: #8b5cf6;
    color: #fff;
    border: none;
    border-radius: 8px;
    padding: 10px 20px;
    font-size: 0.85rem;
    font-weight: 500;
    cursor: pointer;
    transition: background 0.2s, opacity 0.2s;
  }
  button:hover { background: #7c3aed; }
  button:disabled { opacity: 0.5; cursor: not-allowed; }

  .output-card {
    flex: 1;
    background: #1a1a1a;
    border: 1px solid #2a2a2a;
    border-radius: 10px;
    padding: 24px;
    min-height: 400px;
    position: relative;
    line-height: 1.6;
  }

  .output-actions {
    position: absolute;
    top: 12px;
    right: 12px;
    display: none;
    gap: 8px;
  }
  .output-actions.visible { display: flex; }
  .output-actions button {
    background: #232323;
    color: #aaa;
    font-size: 0.72rem;
    padding: 4px 12px;
    border-radius: 6px;
    border: 1px solid #333;
  }
  .output-actions button:hover { background: #2e2e2e; color: #e0e0e0; }

  .status {
    font-size: 0.78rem;
    color: #888;
    min-height: 1.2em;
  }
  .status .timer { color: #8b5cf6; font-variant-numeric: tabular-nums; }

  .article h2 { font-size: 1.35rem; color: #fff; margin: 28px 0 12px; padding-bottom: 6px; border-bottom: 1px solid #2a2a2a; }
  .article h3 { font-size: 1.1rem; color: #fff; margin: 20px 0 8px; }
  .article p { margin-bottom: 14px; color: #ccc; }
  .article ul { margin: 0 0 14px 20px; }
  .article .article-image {
    display: block;
    width: 100%;
    aspect-ratio: 16 / 9;
    object-fit: cover;
    border-radius: 10px;
    margin: 20px 0;
    background: #232323;
  }

  .placeholder { text-align: center; color: #666; padding: 80px 0; }
  .placeholder h3 { font-size: 1.1rem; margin-bottom: 6px; }

  .error-box {
    text-align: center;
    border: 1px solid #ef4444;
    color: #fca5a5;
    background: #1a1111;
    border-radius: 8px;
    padding: 16px;
  }

  .skeleton .bar {
    height: 14px;
    background: #2a2a2a;
    border-radius: 4px;
    margin-bottom: 14px;
    animation: pulse 1.4s ease-in-out infinite;
  }
  .skeleton .tall { height: 26px; }
  .skeleton .mid { height: 20px; }
  .skeleton .image { aspect-ratio: 16 / 9; height: auto; border-radius: 10px; margin: 24px 0; }
  .skeleton .w-75 { width: 75%; }
  .skeleton .w-85 { width: 85%; }
  .skeleton .w-33 { width: 33%; }
  @keyframes pulse { 50% { opacity: 0.45; } }
</style>
</head>
<body>

<header>
  <h1>AI Affiliate Blog Post Generator</h1>
  <p>Turn any product link into a ready-to-publish, SEO-optimized article with images.</p>
</header>

<div class="split-layout">
  <form id="form" class="form-panel" autocomplete="off">
    <div>
      <label for="productUrl">Product URL</label>
      <input type="text" id="productUrl" name="productUrl" placeholder="https://example.com/product">
    </div>
    <div>
      <label for="affiliateLink">Affiliate Link (optional)</label>
      <input type="text" id="affiliateLink" name="affiliateLink" placeholder="https://your-affiliate-link.com">
    </div>
    <div>
      <label for="seoKeywords">SEO Keywords (optional)</label>
      <input type="text" id="seoKeywords" name="seoKeywords" placeholder="e.g. best wireless earbuds, noise cancelling">
    </div>
    <div>
      <label for="targetAudience">Target Audience</label>
      <select id="targetAudience" name="targetAudience"></select>
    </div>
    <div>
      <label for="articleLength">Article Length</label>
      <select id="articleLength" name="articleLength"></select>
    </div>
    <div>
      <label for="writingStyle">Writing Style</label>
      <select id="writingStyle" name="writingStyle"></select>
    </div>
    <div>
      <label for="language">Language</label>
      <select id="language" name="language"></select>
    </div>
    <div class="checkbox-row">
      <input type="checkbox" id="generateImages" name="generateImages">
      <label for="generateImages" style="margin:0">Generate AI Images</label>
    </div>
    <button id="generateBtn" type="submit">Generate Article</button>
    <div id="status" class="status"></div>
  </form>

  <div class="output-card">
    <div id="actions" class="output-actions">
      <button id="shareBtn" type="button">Share</button>
      <button id="copyBtn" type="button">Copy</button>
    </div>
    <div id="output"><!--__EMPTY_VIEW__--></div>
  </div>
</div>

<template id="loadingView"><!--__LOADING_VIEW__--></template>

<script>
  const OPTIONS = /*__FORM_OPTIONS__*/;

  const formEl = document.getElementById('form');
  const outputEl = document.getElementById('output');
  const actionsEl = document.getElementById('actions');
  const statusEl = document.getElementById('status');
  const generateBtn = document.getElementById('generateBtn');
  const copyBtn = document.getElementById('copyBtn');
  const shareBtn = document.getElementById('shareBtn');
  const loadingHtml = document.getElementById('loadingView').innerHTML;

  // ── Form state ──
  const formState = Object.assign({}, OPTIONS.defaults);

  ['targetAudience', 'articleLength', 'writingStyle', 'language'].forEach(name => {
    const sel = document.getElementById(name);
    OPTIONS[name].forEach(value => {
      const opt = document.createElement('option');
      opt.value = value;
      opt.textContent = value;
      sel.appendChild(opt);
    });
  });

  Object.keys(formState).forEach(name => {
    const el = document.getElementById(name);
    if (el.type === 'checkbox') el.checked = formState[name];
    else el.value = formState[name];
    el.addEventListener(el.tagName === 'SELECT' || el.type === 'checkbox' ? 'change' : 'input', () => {
      formState[name] = el.type === 'checkbox' ? el.checked : el.value;
    });
  });

  // ── Timer helper ──
  function createTimer(statusEl) {
    let interval = null;
    return {
      start() {
        const t0 = Date.now();
        clearInterval(interval);
        interval = setInterval(() => {
          const s = ((Date.now() - t0) / 1000).toFixed(1);
          statusEl.innerHTML = '<span class="timer">' + s + 's</span> waiting for response...';
        }, 100);
      },
      stop() { clearInterval(interval); interval = null; }
    };
  }
  const timer = createTimer(statusEl);

  // ── Display state ──
  let latestRequest = 0;
  let current = null;

  function showView(html, result) {
    outputEl.innerHTML = html;
    current = result;
    actionsEl.classList.toggle('visible', !!(result && result.article));
    copyBtn.textContent = 'Copy';
  }

  function showError(message) {
    const box = document.createElement('div');
    box.className = 'error-box';
    box.innerHTML = '<h3>Generation Failed</h3><p></p>';
    box.querySelector('p').textContent = message;
    showView(box.outerHTML, null);
  }

  formEl.addEventListener('submit', async e => {
    e.preventDefault();
    if (!formState.productUrl.trim()) {
      showError('Please enter a product URL.');
      return;
    }

    const requestId = ++latestRequest;
    showView(loadingHtml, null);
    generateBtn.disabled = true;
    generateBtn.textContent = 'Generating...';
    timer.start();

    try {
      const res = await fetch('/api/generate', {
        method: 'POST',
        headers: { 'Content-Type': 'application/json' },
        body: JSON.stringify(Object.assign({ requestId }, formState)),
      });
      const data = await res.json();
      if (requestId !== latestRequest) return;
      timer.stop();
      if (!res.ok || data.error) {
        data.html ? showView(data.html, null) : showError(data.error || 'HTTP ' + res.status);
        statusEl.textContent = '';
        return;
      }
      showView(data.html, data);
      statusEl.innerHTML = 'Completed in <span class="timer">' + data.elapsed + 's</span>';
    } catch (err) {
      if (requestId !== latestRequest) return;
      timer.stop();
      showError('An unknown error occurred. Please try again.');
      statusEl.textContent = '';
    } finally {
      if (requestId === latestRequest) {
        generateBtn.disabled = false;
        generateBtn.textContent = 'Generate Article';
      }
    }
  });

  // ── Copy / Share ──
  copyBtn.addEventListener('click', () => {
    if (!current) return;
    if (!navigator.clipboard) { copyBtn.textContent = 'Copy failed'; return; }
    navigator.clipboard.writeText(current.article).then(() => {
      copyBtn.textContent = 'Copied!';
      setTimeout(() => copyBtn.textContent = 'Copy', 2000);
    }).catch(() => {
      copyBtn.textContent = 'Copy failed';
      setTimeout(() => copyBtn.textContent = 'Copy', 2000);
    });
  });

  shareBtn.addEventListener('click', async () => {
    if (!current) return;
    if (!navigator.share) {
      alert('Web Share API is not supported in your browser.');
      return;
    }
    try {
      await navigator.share(current.share);
    } catch (err) {
      console.error('Share failed:', err);
    }
  });
</script>
</body>
</html>
"""

if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(debug=True, port=config.PORT, threaded=True)
