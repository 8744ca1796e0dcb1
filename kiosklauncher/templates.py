from jinja2 import Template

# control window page; talks to the launcher through window.pywebview.api
CONTROL_HTML = r"""<!doctype html>
<html lang="en" data-bs-theme="dark">
<head>
  <meta charset="utf-8">
  <title>Kiosk Launcher</title>
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/css/bootstrap.min.css" rel="stylesheet">
  <style>
    .path { color: rgba(255,255,255,.6); word-break: break-all; }
    #log { height: 180px; overflow-y: auto; font-size: .8rem; background:#111; border-radius:.5rem; }
    #log .error { color: #f88; } #log .warning { color: #fc6; } #log .success { color: #8f8; }
    #toast { position: fixed; right: 1rem; bottom: 1rem; display: none; }
  </style>
</head>
<body>
<nav class="navbar bg-body-tertiary px-3">
  <span class="navbar-brand">Kiosk Launcher</span>
  <span class="small">Service: <strong id="serverStatus">checking...</strong></span>
</nav>

<div class="container py-3">
  <div class="card mb-3">
    <div class="card-body">
      <div id="project"></div>
      <div class="mt-3 d-flex flex-wrap gap-2">
        <button class="btn btn-outline-light btn-sm" onclick="addProject()">Select project folder</button>
        <button class="btn btn-outline-light btn-sm" id="openBtn" onclick="openFolder()">Open folder</button>
        <button class="btn btn-outline-danger btn-sm" id="deleteBtn" onclick="deleteProject()">Remove</button>
        <button class="btn btn-success btn-sm ms-auto" id="launchBtn" onclick="launchProject()">Launch kiosk</button>
      </div>
    </div>
  </div>

  <form class="card mb-3" onsubmit="saveEntrances(event)">
    <div class="card-body row g-2 align-items-end">
      <div class="col"><label class="form-label small">Entrance</label>
        <input class="form-control form-control-sm" id="entrance"></div>
      <div class="col"><label class="form-label small">Sub-entrance (second display)</label>
        <input class="form-control form-control-sm" id="subEntrance"></div>
      <div class="col-auto form-check ms-2">
        <input class="form-check-input" type="checkbox" id="interface">
        <label class="form-check-label small" for="interface">Show this window on start</label></div>
      <div class="col-auto"><button class="btn btn-primary btn-sm">Save</button></div>
    </div>
  </form>

  <div id="log" class="p-2"></div>
</div>
<div id="toast" class="alert"></div>

<script>
const SERVICE = "{{ service_url }}";
let currentProject = null;

function api() { return window.pywebview.api; }

function notify(message, type) {
  const t = document.getElementById("toast");
  t.className = "alert alert-" + ({error: "danger", success: "success"}[type] || "info");
  t.textContent = message;
  t.style.display = "block";
  setTimeout(() => { t.style.display = "none"; }, 3000);
}

window.onServerLog = function (level, message) {
  const line = document.createElement("div");
  line.className = level;
  line.textContent = "[" + new Date().toLocaleTimeString() + "] " + message;
  const log = document.getElementById("log");
  log.appendChild(line);
  log.scrollTop = log.scrollHeight;
};

function renderProject() {
  const el = document.getElementById("project");
  const has = !!(currentProject && currentProject.path);
  el.innerHTML = has
    ? '<div class="fw-semibold"></div><div class="small path"></div>'
    : '<p class="text-secondary mb-0">No project yet. Select a project folder to start.</p>';
  if (has) {
    el.children[0].textContent = currentProject.name;
    el.children[1].textContent = currentProject.path;
  }
  document.getElementById("launchBtn").disabled = !has;
  document.getElementById("openBtn").disabled = !has;
  document.getElementById("deleteBtn").disabled = !has;
}

async function loadAll() {
  const p = await api().get_project();
  currentProject = p.success ? p.project : null;
  renderProject();
  const c = await api().get_config();
  if (c.success) {
    document.getElementById("entrance").value = c.config.entrance || "";
    document.getElementById("subEntrance").value = c.config.subEntrance || "";
    document.getElementById("interface").checked = c.config.interface === true;
  }
}

async function addProject() {
  const r = await api().select_folder();
  if (r.success && r.path) {
    const isUpdate = currentProject !== null;
    const name = r.path.split(/[\\/]/).filter(Boolean).pop() || "Project";
    currentProject = {id: Date.now(), name: name, path: r.path};
    await api().save_project(currentProject);
    renderProject();
    notify(isUpdate ? "Project updated" : "Project added", "success");
  } else if (r.cancelled) {
    notify("Cancelled", "info");
  } else {
    notify("Folder selection failed: " + (r.error || ""), "error");
  }
}

async function openFolder() {
  const r = await api().open_folder(currentProject ? currentProject.path : null);
  notify(r.success ? "Opening folder" : "Open folder failed: " + r.error, r.success ? "success" : "error");
}

async function deleteProject() {
  if (!currentProject || !confirm('Remove project "' + currentProject.name + '"?')) return;
  currentProject = null;
  await api().save_project(null);
  renderProject();
  notify("Project removed", "success");
}

async function launchProject() {
  if (!currentProject) { notify("No project folder", "error"); return; }
  const u = await api().update_config({address: currentProject.path});
  if (!u.success) { notify("Config update failed: " + u.error, "error"); return; }
  const r = await api().launch_kiosk();
  notify(r.success ? "Kiosk launched" : "Launch failed: " + r.error, r.success ? "success" : "error");
}

async function saveEntrances(ev) {
  ev.preventDefault();
  const a = await api().update_entrance(document.getElementById("entrance").value.trim());
  const b = await api().update_sub_entrance(document.getElementById("subEntrance").value.trim());
  const c = await api().update_config({interface: document.getElementById("interface").checked});
  const ok = a.success && b.success && c.success;
  notify(ok ? "Saved" : "Save failed", ok ? "success" : "error");
}

async function checkServerStatus() {
  const el = document.getElementById("serverStatus");
  try {
    const r = await fetch(SERVICE + "/status");
    el.textContent = r.ok ? "running" : "connection failed";
  } catch (e) {
    el.textContent = "not running";
  }
}

window.addEventListener("pywebviewready", () => { loadAll(); });
checkServerStatus();
setInterval(checkServerStatus, 10000);
</script>
</body>
</html>
"""

def render_control_html(service_url: str) -> str:
    return Template(CONTROL_HTML).render(service_url=service_url)
