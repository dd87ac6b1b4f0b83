"""Root page of the local view: login screen or main screen by session."""

from html import escape

_FONTS_CSS_URL = (
    "https://fonts.googleapis.com/css2?family=DM+Sans:wght@400;500;600&display=swap"
)

_STYLE = """
        * { box-sizing: border-box; }
        body {
            font-family: 'DM Sans', system-ui, sans-serif;
            margin: 0;
            min-height: 100vh;
            background: #000;
            color: #e0e0e0;
            padding: 2rem 1rem;
        }
        .wrap { max-width: 720px; margin: 0 auto; }
        h1 { font-size: 2rem; font-weight: 600; color: #fff; margin: 0 0 1.5rem 0; }
        .card { background: #0c0c0c; border: 1px solid #1a1a1a; padding: 1.5rem; margin-bottom: 1rem; }
        input, button { font: inherit; padding: 0.5rem 0.75rem; margin: 0.25rem 0; }
        input { width: 100%; background: #111; color: #eee; border: 1px solid #222; }
        button { background: #1a1a1a; color: #eee; border: 1px solid #333; cursor: pointer; }
        .tabs button.active { border-color: #888; }
        .row { display: flex; gap: 1rem; align-items: center; padding: 0.5rem 0; border-bottom: 1px solid #141414; }
        .row img { width: 46px; }
        .notice { color: #c88; min-height: 1.25rem; }
        .muted { color: #777; }
"""

_LOGIN_SCRIPT = """
        let mode = 'signin';
        const $ = (id) => document.getElementById(id);
        async function post(path, body) {
            const resp = await fetch('/api/v1' + path, {
                method: 'POST',
                headers: {'Content-Type': 'application/json'},
                body: JSON.stringify(body || {}),
            });
            const data = await resp.json();
            $('notice').textContent = (data.notice && data.notice.message) || data.message || '';
            return resp.ok;
        }
        function toggleMode() {
            mode = mode === 'signin' ? 'signup' : 'signin';
            $('confirm').style.display = mode === 'signup' ? 'block' : 'none';
            $('submit').textContent = mode === 'signup' ? 'Create account' : 'Sign in';
            $('notice').textContent = '';
        }
        async function submitForm(event) {
            event.preventDefault();
            const body = {email: $('email').value, password: $('password').value};
            let ok;
            if (mode === 'signup') {
                body.password_confirm = $('confirm').value;
                ok = await post('/auth/sign-up', body);
            } else {
                ok = await post('/auth/sign-in', body);
            }
            if (ok) location.reload();
        }
        async function resetPassword() {
            await post('/auth/password-reset', {email: $('email').value});
        }
"""

_HOME_SCRIPT = """
        let tab = 'search';
        const $ = (id) => document.getElementById(id);
        async function call(method, path, body) {
            const resp = await fetch('/api/v1' + path, {
                method,
                headers: {'Content-Type': 'application/json'},
                body: body ? JSON.stringify(body) : undefined,
            });
            const data = await resp.json();
            if (data.notice) $('notice').textContent = data.notice.message;
            else if (!resp.ok) $('notice').textContent = data.message || '';
            return data;
        }
        function render(items) {
            $('rows').replaceChildren();
            for (const m of items || []) {
                const row = document.createElement('div');
                row.className = 'row';
                if (m.poster_url) {
                    const img = document.createElement('img');
                    img.src = m.poster_url;
                    img.alt = '';
                    row.appendChild(img);
                }
                const text = document.createElement('div');
                text.style.flex = '1';
                text.textContent = m.title + ' ';
                const year = document.createElement('span');
                year.className = 'muted';
                year.textContent = m.year || '';
                text.appendChild(year);
                row.appendChild(text);
                for (const status of ['toWatch', 'watched']) {
                    if (m.status === status) continue;
                    const b = document.createElement('button');
                    b.textContent = status === 'toWatch' ? 'To watch' : 'Watched';
                    b.onclick = () => save(m, status);
                    row.appendChild(b);
                }
                if (m.status) {
                    const r = document.createElement('button');
                    r.textContent = 'Remove';
                    r.onclick = async () => { await call('DELETE', '/movies/' + m.id); refresh(); };
                    row.appendChild(r);
                }
                $('rows').appendChild(row);
            }
        }
        async function save(m, status) {
            await call('PUT', '/movies/' + m.id, {
                status, title: m.title, year: m.year,
                poster_path: m.poster_url ? '/' + m.poster_url.split('/').pop() : null,
            });
            refresh();
        }
        async function refresh() {
            if (tab === 'search') {
                const q = $('query').value.trim();
                const data = await call('GET', q ? '/catalog/search?q=' + encodeURIComponent(q) : '/catalog/popular');
                render(data.items);
            } else {
                const data = await call('GET', '/movies?status=' + tab);
                render(data.items);
            }
        }
        function selectTab(name) {
            tab = name;
            document.querySelectorAll('.tabs button').forEach(
                (b) => b.classList.toggle('active', b.dataset.tab === name));
            refresh();
        }
        async function signOut() {
            await call('POST', '/auth/sign-out');
            location.reload();
        }
        async function deleteAccount() {
            if (!confirm('Delete your account and all saved movies?')) return;
            const password = prompt('Password (leave empty if you signed in with Google)') || null;
            const data = await call('POST', '/account/delete', {confirmed: true, password});
            if (data.state === 'success') location.reload();
        }
        const ws = new WebSocket((location.protocol === 'https:' ? 'wss://' : 'ws://') + location.host + '/api/v1/ws');
        ws.onmessage = (event) => {
            const data = JSON.parse(event.data);
            if (data.event === 'session' && data.session.route !== 'home') location.reload();
            if (data.event === 'movies' && data.tabs[tab]) render(data.tabs[tab]);
        };
        refresh();
"""


def _page(app_name: str, body: str, script: str = "") -> str:
    return f"""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{escape(app_name)}</title>
    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link href="{_FONTS_CSS_URL}" rel="stylesheet">
    <style>{_STYLE}</style>
</head>
<body>
    <div class="wrap">{body}</div>
    <script>{script}</script>
</body>
</html>
"""


def _login_body() -> str:
    return """
        <h1>Movie Watchlist</h1>
        <div class="card">
            <form onsubmit="submitForm(event)">
                <input id="email" type="email" placeholder="Email" autocomplete="email">
                <input id="password" type="password" placeholder="Password">
                <input id="confirm" type="password" placeholder="Confirm password" style="display:none">
                <button id="submit" type="submit">Sign in</button>
                <button type="button" onclick="toggleMode()">Sign in / Create account</button>
                <button type="button" onclick="resetPassword()">Forgot password?</button>
            </form>
            <p class="notice" id="notice"></p>
        </div>
"""


def _home_body(identity_label: str) -> str:
    return f"""
        <h1>Movie Watchlist</h1>
        <div class="card">
            <span class="muted">Signed in as {escape(identity_label)}</span>
            <button onclick="signOut()">Sign out</button>
            <button onclick="deleteAccount()">Delete account</button>
        </div>
        <div class="card">
            <input id="query" placeholder="Search movies" onkeydown="if (event.key === 'Enter') selectTab('search')">
            <div class="tabs">
                <button data-tab="search" class="active" onclick="selectTab('search')">Search</button>
                <button data-tab="toWatch" onclick="selectTab('toWatch')">To watch</button>
                <button data-tab="watched" onclick="selectTab('watched')">Watched</button>
            </div>
            <p class="notice" id="notice"></p>
            <div id="rows"></div>
        </div>
"""


def render_root_page(app_name: str, route: str | None, identity_label: str | None = None) -> str:
    """Return HTML for the current route; an empty page while the session is loading."""
    if route is None:
        return _page(app_name, "")
    if route == "login":
        return _page(app_name, _login_body(), _LOGIN_SCRIPT)
    return _page(app_name, _home_body(identity_label or ""), _HOME_SCRIPT)
