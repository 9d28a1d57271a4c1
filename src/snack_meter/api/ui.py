"""Single-page camera and upload UI served at the site root."""

SNACK_METER_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Snack Meter</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      h1 { margin-bottom: 0.5rem; }
      .row { margin-bottom: 1rem; }
      video, img { max-width: 360px; border-radius: 8px; background: #eee; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      #error { color: #b91c1c; }
      #commentary { background: #fffbeb; border-left: 4px solid #fbbf24; }
      table { border-collapse: collapse; }
      td, th { padding: 0.3rem 0.8rem; text-align: left; }
    </style>
  </head>
  <body>
    <h1>Snack Meter</h1>
    <p>Snap or upload a parippuvada or vazhaikkapam and see how it measures up.</p>
    <div class="row">
      <video id="camera" autoplay playsinline muted></video>
      <canvas id="frame" hidden></canvas>
    </div>
    <div class="row">
      <select id="snack-type">
        <option value="">Let the meter guess</option>
        <option value="parippuvada">Parippuvada</option>
        <option value="vazhaikkapam">Vazhaikkapam</option>
      </select>
      <button onclick="capture()">Capture</button>
      <input id="upload" type="file" accept="image/*" onchange="upload(this)" />
    </div>
    <p id="error"></p>
    <div id="result" hidden>
      <img id="preview" alt="Analyzed snack" />
      <p>Ithu oru <strong id="kind"></strong> aanu! Surface area:
        <strong id="area"></strong> cm²</p>
      <p id="commentary"></p>
    </div>
    <h2>Snack Hall of Fame</h2>
    <table>
      <thead><tr><th>Rank</th><th>Snack</th><th>Area (cm²)</th></tr></thead>
      <tbody id="leaderboard"></tbody>
    </table>
    <script>
      let stream = null;

      async function startCamera() {
        if (!navigator.mediaDevices || !navigator.mediaDevices.getUserMedia) {
          return;
        }
        try {
          stream = await navigator.mediaDevices.getUserMedia({ video: true });
          document.getElementById('camera').srcObject = stream;
        } catch (err) {
          showError('Camera access was denied. You can still upload a photo.');
        }
      }

      function stopCamera() {
        if (stream) {
          stream.getTracks().forEach((track) => track.stop());
          stream = null;
        }
      }

      function showError(message) {
        document.getElementById('error').textContent = message || '';
      }

      function capture() {
        const video = document.getElementById('camera');
        if (!stream || !video.videoWidth) {
          showError('Camera is not ready.');
          return;
        }
        const canvas = document.getElementById('frame');
        canvas.width = video.videoWidth;
        canvas.height = video.videoHeight;
        canvas.getContext('2d').drawImage(video, 0, 0);
        analyze(canvas.toDataURL('image/jpeg'));
      }

      function upload(input) {
        const file = input.files[0];
        if (!file) {
          return;
        }
        const reader = new FileReader();
        reader.onload = () => analyze(reader.result);
        reader.readAsDataURL(file);
      }

      async function analyze(imageData) {
        showError('');
        const snackType = document.getElementById('snack-type').value || null;
        const res = await fetch('/api/analyze', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({ imageData, snackType }),
        });
        const data = await res.json();
        if (data.error) {
          document.getElementById('result').hidden = true;
          showError(data.error);
          return;
        }
        document.getElementById('preview').src = imageData;
        document.getElementById('kind').textContent = data.snackType;
        document.getElementById('area').textContent = data.area.toFixed(1);
        document.getElementById('commentary').textContent =
          data.commentary || (data.warnings || []).join(' ');
        document.getElementById('result').hidden = false;
        renderLeaderboard(data.leaderboard || []);
      }

      function renderLeaderboard(entries) {
        const body = document.getElementById('leaderboard');
        body.innerHTML = '';
        entries.forEach((snack, index) => {
          const row = document.createElement('tr');
          [index + 1, snack.name, snack.area.toFixed(1)].forEach((value) => {
            const cell = document.createElement('td');
            cell.textContent = value;
            row.appendChild(cell);
          });
          body.appendChild(row);
        });
      }

      async function loadLeaderboard() {
        const res = await fetch('/api/leaderboard');
        const data = await res.json();
        renderLeaderboard(data.leaderboard);
      }

      window.addEventListener('pagehide', stopCamera);
      window.addEventListener('beforeunload', stopCamera);
      startCamera();
      loadLeaderboard();
    </script>
  </body>
</html>
"""
