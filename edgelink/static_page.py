"""The single HTML page served at / and /index.html."""

INDEX_HTML = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>URL Shortener</title>
  <style>
    body { font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px; }
    .form-group { margin-bottom: 15px; }
    input { width: 100%; padding: 8px; margin-top: 5px; }
    button { padding: 10px 15px; background-color: #4CAF50; color: white; border: none; cursor: pointer; }
    #result { margin-top: 20px; padding: 10px; background-color: #f0f0f0; }
  </style>
</head>
<body>
  <h1>URL Shortener</h1>

  <form id="shortenForm">
    <div class="form-group">
      <label for="longUrl">Long URL:</label>
      <input type="url" id="longUrl" required>
    </div>
    <div class="form-group">
      <label for="customId">Custom ID (optional):</label>
      <input type="text" id="customId" pattern="[a-zA-Z0-9_-]+">
    </div>
    <button type="submit">Create Short Link</button>
  </form>

  <div id="result" style="display: none;">
    <h3>Short Link Created!</h3>
    <p>Short URL: <a id="shortUrl" href="#" target="_blank"></a></p>
    <p>Original URL: <span id="originalUrl"></span></p>
  </div>

  <script>
    document.getElementById('shortenForm').addEventListener('submit', async function (e) {
      e.preventDefault();
      const longUrl = document.getElementById('longUrl').value;
      const customId = document.getElementById('customId').value;
      try {
        const response = await fetch('/api/create', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({ longUrl, customId })
        });
        if (response.ok) {
          const data = await response.json();
          document.getElementById('result').style.display = 'block';
          document.getElementById('shortUrl').href = data.shortUrl;
          document.getElementById('shortUrl').textContent = data.shortUrl;
          document.getElementById('originalUrl').textContent = data.longUrl;
        } else {
          alert('Error: ' + await response.text());
        }
      } catch (error) {
        alert('Network error occurred');
      }
    });
  </script>
</body>
</html>
"""
