"""
Static demo page served at GET /.
"""

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Latency Demo</title>
    <style>
        body { font-family: sans-serif; margin: 20px; background-color: #f4f4f4; color: #333; }
        .container { background-color: #fff; padding: 20px; border-radius: 8px; box-shadow: 0 0 10px rgba(0,0,0,0.1); }
        button {
            background-color: #007bff; color: white; padding: 10px 15px;
            border: none; border-radius: 5px; cursor: pointer; font-size: 16px;
        }
        button:hover { background-color: #0056b3; }
        button:disabled { background-color: #6c757d; cursor: wait; }
        #result { margin-top: 20px; padding: 10px; border: 1px solid #ddd; background-color: #e9e9e9; border-radius: 5px; }
        .loader {
            border: 5px solid #f3f3f3;
            border-top: 5px solid #3498db;
            border-radius: 50%;
            width: 30px;
            height: 30px;
            animation: spin 1s linear infinite;
            display: none;
            margin-top: 10px;
        }
        @keyframes spin {
            0% { transform: rotate(0deg); }
            100% { transform: rotate(360deg); }
        }
    </style>
</head>
<body>
    <div class="container">
        <h1>Simulate Backend Latency</h1>
        <p>Click the button below. The server will intentionally delay its response.</p>
        <button id="latencyButton" type="button">Trigger Latency</button>
        <div class="loader" id="loader"></div>
        <div id="result">Click the button to see the response.</div>
    </div>

    <script>
        const button = document.getElementById('latencyButton');
        const resultDiv = document.getElementById('result');
        const loader = document.getElementById('loader');

        button.addEventListener('click', async () => {
            resultDiv.textContent = 'Request sent, waiting for server response...';
            loader.style.display = 'block';
            button.disabled = true;

            const startTime = Date.now();

            try {
                const response = await fetch('/simulate_latency', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' }
                });

                if (!response.ok) {
                    throw new Error(`HTTP error! status: ${response.status}`);
                }

                const data = await response.json();
                const duration = ((Date.now() - startTime) / 1000).toFixed(2);

                resultDiv.textContent = '';
                const heading = document.createElement('strong');
                heading.textContent = `Server responded in ${duration} seconds`;
                const message = document.createElement('p');
                message.textContent = data.message;
                resultDiv.append(heading, message);
            } catch (error) {
                resultDiv.textContent = `Error: ${error.message}`;
                console.error(`Frontend error: ${error.message}`);
            } finally {
                loader.style.display = 'none';
                button.disabled = false;
            }
        });
    </script>
</body>
</html>
"""
