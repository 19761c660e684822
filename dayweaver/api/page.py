"""Board UI served at the web root."""

INDEX_HTML = """
<!DOCTYPE html>
<html>
<head>
    <title>Day Weaver</title>
    <meta charset="utf-8">
    <style>
        body { font-family: Arial, sans-serif; max-width: 900px; margin: 40px auto; padding: 20px; }
        button { padding: 6px 12px; margin: 2px; cursor: pointer; }
        input, select { padding: 6px; margin: 2px; }
        .section { margin: 20px 0; padding: 15px; border: 1px solid #ddd; border-radius: 5px; }
        .task { padding: 8px; border-bottom: 1px solid #eee; }
        .done { text-decoration: line-through; color: #888; }
        .expired { color: #b00; }
        .toast { padding: 8px; margin: 4px 0; background: #eef; border-radius: 4px; }
        .toast.destructive { background: #fdd; }
        .muted { color: #888; font-size: 0.9em; }
    </style>
</head>
<body>
    <h1>Day Weaver</h1>
    <p>Plan your day: tasks, deadlines, priorities and an AI-suggested schedule.</p>

    <div class="section">
        <h2>New Task</h2>
        <input id="text" placeholder="What needs doing?">
        <input id="date" type="date">
        <input id="time" type="time">
        <select id="priority">
            <option>High</option><option selected>Medium</option><option>Low</option>
        </select>
        <input id="note" placeholder="Note (optional)">
        <button onclick="addTask()">Add Task</button>
        <button onclick="send({action: 'delete_all'})">Delete All</button>
        <button onclick="suggestSchedule()">Suggest Schedule</button>
    </div>

    <div class="section">
        <input id="search" placeholder="Search tasks..." oninput="send({action: 'input', value: this.value})">
        <span id="searching" class="muted"></span>
    </div>

    <div id="toasts"></div>
    <div id="lists"></div>
    <div class="section"><h2>Schedule</h2><div id="schedule" class="muted">No schedule yet.</div></div>

    <script>
        const REACTIONS = ['👍', '❤️', '😂', '😮', '😢', '😠'];
        const socket = new WebSocket((location.protocol === 'https:' ? 'wss://' : 'ws://') + location.host + '/ws/board');

        function send(message) {
            socket.send(JSON.stringify(message));
        }

        function addTask() {
            send({action: 'add', task: {
                text: document.getElementById('text').value,
                deadline_date: document.getElementById('date').value,
                deadline_time: document.getElementById('time').value,
                priority: document.getElementById('priority').value,
                note: document.getElementById('note').value || null
            }});
        }

        function escapeHtml(value) {
            const div = document.createElement('div');
            div.textContent = value == null ? '' : value;
            return div.innerHTML;
        }

        function renderTask(task, bucket) {
            const reactions = REACTIONS.map(e =>
                `<button onclick="send({action: 'react', id: '${task.id}', emoji: '${e}'})">${e} ${task.reactions[e] || ''}</button>`
            ).join('');
            return `<div class="task ${bucket}">
                <input type="checkbox" ${task.is_completed ? 'checked' : ''}
                    onclick="send({action: 'toggle', id: '${task.id}'})">
                <strong>${escapeHtml(task.text)}</strong>
                <span class="muted">${escapeHtml(task.deadline)} · ${task.priority}</span>
                <button onclick="send({action: 'delete', id: '${task.id}'})">Delete</button>
                <div>${reactions}</div>
                ${task.note ? `<div class="muted">${escapeHtml(task.note)}</div>` : ''}
            </div>`;
        }

        function renderPage(title, view, bucket) {
            if (!view.total_items) {
                return `<div class="section"><h2>${title}</h2><p class="muted">No tasks.</p></div>`;
            }
            const items = view.items.map(t => renderTask(t, bucket)).join('');
            const prev = view.page > 1
                ? `<button onclick="send({action: 'page', list: '${view.list_key}', page: ${view.page - 1}})">Previous</button>` : '';
            const next = view.page < view.total_pages
                ? `<button onclick="send({action: 'page', list: '${view.list_key}', page: ${view.page + 1}})">Next</button>` : '';
            return `<div class="section"><h2>${title} (${view.total_items})</h2>${items}
                ${view.total_pages > 1 ? `${prev} Page ${view.page} of ${view.total_pages} ${next}` : ''}</div>`;
        }

        socket.onmessage = (event) => {
            const data = JSON.parse(event.data);
            const board = data.board;
            document.getElementById('searching').textContent = board.is_debouncing ? 'Searching...' : '';
            document.getElementById('toasts').innerHTML = data.notifications.map(n =>
                `<div class="toast ${n.variant}"><strong>${escapeHtml(n.title)}</strong> ${escapeHtml(n.description)}</div>`
            ).join('');
            document.getElementById('lists').innerHTML = board.search_mode
                ? renderPage(`Results for "${escapeHtml(board.search_term)}"`, board.search, '')
                : renderPage('Pending', board.pending, '') +
                  renderPage('Done', board.done, 'done') +
                  renderPage('Expired', board.expired, 'expired');
        };

        async function suggestSchedule() {
            const target = document.getElementById('schedule');
            target.innerHTML = 'Generating schedule...';
            try {
                const response = await fetch('/schedule', { method: 'POST' });
                const data = await response.json();
                if (!response.ok) {
                    target.innerHTML = 'Error: ' + escapeHtml(data.detail || response.statusText);
                    return;
                }
                const rows = data.schedule.map(s =>
                    `<tr><td>${escapeHtml(s.start_time)} - ${escapeHtml(s.end_time)}</td><td>${escapeHtml(s.task)}</td><td>${s.priority}</td></tr>`
                ).join('');
                target.innerHTML = `<table>${rows}</table><p>${escapeHtml(data.notes || '')}</p>`;
            } catch (error) {
                target.innerHTML = 'Error: ' + error.message;
            }
        }
    </script>
</body>
</html>
"""
