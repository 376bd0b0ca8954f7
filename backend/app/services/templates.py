"""Synthetic project skeletons, one per archetype.

Everything here is plain string templating: the same archetype and project
name always produce the same nodes in the same order, parents first.
"""
import json
from collections.abc import Callable
from dataclasses import dataclass

from app.services.classifier import Archetype
from app.services.paths import basename_of
from app.services.slugs import DEFAULT_FALLBACK, canonicalize


@dataclass(frozen=True)
class GeneratedNode:
    path: str
    name: str
    content: str
    is_folder: bool


def folder(path: str) -> GeneratedNode:
    return GeneratedNode(path=path, name=basename_of(path), content="", is_folder=True)


def file(path: str, content: str) -> GeneratedNode:
    return GeneratedNode(path=path, name=basename_of(path), content=content, is_folder=False)


def package_identifier(project_name: str) -> str:
    return canonicalize(project_name) or DEFAULT_FALLBACK


def _manifest(data: dict) -> str:
    return json.dumps(data, indent=2)


def frontend_project(name: str) -> list[GeneratedNode]:
    package = _manifest(
        {
            "name": package_identifier(name),
            "version": "1.0.0",
            "private": True,
            "dependencies": {
                "react": "^18.2.0",
                "react-dom": "^18.2.0",
                "typescript": "^4.9.5",
            },
            "scripts": {
                "start": "react-scripts start",
                "build": "react-scripts build",
            },
        }
    )
    app_tsx = (
        "import React from 'react';\n"
        "import './App.css';\n"
        "\n"
        "function App() {\n"
        "  return (\n"
        '    <div className="App">\n'
        '      <header className="App-header">\n'
        f"        <h1>Welcome to {name}</h1>\n"
        "        <p>Your React application is ready!</p>\n"
        "      </header>\n"
        "    </div>\n"
        "  );\n"
        "}\n"
        "\n"
        "export default App;\n"
    )
    index_tsx = (
        "import React from 'react';\n"
        "import ReactDOM from 'react-dom/client';\n"
        "import App from './App';\n"
        "\n"
        "const root = ReactDOM.createRoot(\n"
        "  document.getElementById('root') as HTMLElement\n"
        ");\n"
        "\n"
        "root.render(\n"
        "  <React.StrictMode>\n"
        "    <App />\n"
        "  </React.StrictMode>\n"
        ");\n"
    )
    app_css = (
        ".App {\n"
        "  text-align: center;\n"
        "}\n"
        "\n"
        ".App-header {\n"
        "  background-color: #282c34;\n"
        "  padding: 20px;\n"
        "  color: white;\n"
        "  min-height: 50vh;\n"
        "  display: flex;\n"
        "  flex-direction: column;\n"
        "  align-items: center;\n"
        "  justify-content: center;\n"
        "}\n"
    )
    index_html = (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '    <meta charset="utf-8" />\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1" />\n'
        f"    <title>{name}</title>\n"
        "</head>\n"
        "<body>\n"
        '    <div id="root"></div>\n'
        "</body>\n"
        "</html>\n"
    )
    return [
        folder("/src"),
        folder("/public"),
        file("/package.json", package),
        file("/src/App.tsx", app_tsx),
        file("/src/index.tsx", index_tsx),
        file("/src/App.css", app_css),
        file("/public/index.html", index_html),
    ]


def api_project(name: str) -> list[GeneratedNode]:
    package = _manifest(
        {
            "name": package_identifier(name),
            "version": "1.0.0",
            "main": "src/server.js",
            "dependencies": {"express": "^4.18.2", "cors": "^2.8.5"},
            "scripts": {
                "start": "node src/server.js",
                "dev": "nodemon src/server.js",
            },
        }
    )
    server_js = (
        "const express = require('express');\n"
        "const cors = require('cors');\n"
        "\n"
        "const app = express();\n"
        "const PORT = process.env.PORT || 3000;\n"
        "\n"
        "app.use(cors());\n"
        "app.use(express.json());\n"
        "\n"
        "app.get('/', (req, res) => {\n"
        f"    res.json({{ message: 'Welcome to {name} API' }});\n"
        "});\n"
        "\n"
        "app.get('/api/health', (req, res) => {\n"
        "    res.json({ status: 'OK', timestamp: new Date().toISOString() });\n"
        "});\n"
        "\n"
        "app.listen(PORT, () => {\n"
        f"    console.log(`{name} API server running on port ${{PORT}}`);\n"
        "});\n"
    )
    readme = (
        f"# {name}\n"
        "\n"
        "A Node.js API server built with Express.\n"
        "\n"
        "## Getting Started\n"
        "\n"
        "1. Install dependencies: `npm install`\n"
        "2. Start the server: `npm start`\n"
        "\n"
        "## Endpoints\n"
        "\n"
        "- `GET /` - Welcome message\n"
        "- `GET /api/health` - Health check\n"
    )
    return [
        folder("/src"),
        file("/package.json", package),
        file("/src/server.js", server_js),
        file("/README.md", readme),
    ]


def full_stack_project(name: str) -> list[GeneratedNode]:
    identifier = package_identifier(name)
    root_package = _manifest(
        {
            "name": identifier,
            "version": "1.0.0",
            "private": True,
            "workspaces": ["frontend", "backend"],
            "scripts": {
                "dev": (
                    'concurrently "npm run dev --workspace=backend" '
                    '"npm run dev --workspace=frontend"'
                ),
                "build": (
                    "npm run build --workspace=frontend && "
                    "npm run build --workspace=backend"
                ),
            },
            "devDependencies": {"concurrently": "^7.6.0"},
        }
    )
    frontend_package = _manifest(
        {
            "name": f"{identifier}-frontend",
            "version": "1.0.0",
            "dependencies": {
                "react": "^18.2.0",
                "react-dom": "^18.2.0",
                "axios": "^1.3.0",
            },
            "scripts": {
                "start": "react-scripts start",
                "build": "react-scripts build",
                "dev": "react-scripts start",
            },
        }
    )
    backend_package = _manifest(
        {
            "name": f"{identifier}-backend",
            "version": "1.0.0",
            "main": "server.js",
            "dependencies": {"express": "^4.18.2", "cors": "^2.8.5"},
            "scripts": {"start": "node server.js", "dev": "nodemon server.js"},
        }
    )
    app_js = (
        "import React, { useState, useEffect } from 'react';\n"
        "import axios from 'axios';\n"
        "\n"
        "function App() {\n"
        "  const [message, setMessage] = useState('');\n"
        "\n"
        "  useEffect(() => {\n"
        "    axios.get('http://localhost:3001/')\n"
        "      .then(response => setMessage(response.data.message))\n"
        "      .catch(error => console.error('Error:', error));\n"
        "  }, []);\n"
        "\n"
        "  return (\n"
        '    <div className="App">\n'
        f"      <h1>{name}</h1>\n"
        "      <p>Backend message: {message}</p>\n"
        "    </div>\n"
        "  );\n"
        "}\n"
        "\n"
        "export default App;\n"
    )
    server_js = (
        "const express = require('express');\n"
        "const cors = require('cors');\n"
        "\n"
        "const app = express();\n"
        "const PORT = process.env.PORT || 3001;\n"
        "\n"
        "app.use(cors());\n"
        "app.use(express.json());\n"
        "\n"
        "app.get('/', (req, res) => {\n"
        f"    res.json({{ message: 'Hello from {name} backend!' }});\n"
        "});\n"
        "\n"
        "app.listen(PORT, () => {\n"
        "    console.log(`Backend server running on port ${PORT}`);\n"
        "});\n"
    )
    return [
        folder("/frontend"),
        folder("/backend"),
        file("/package.json", root_package),
        file("/frontend/package.json", frontend_package),
        file("/backend/package.json", backend_package),
        folder("/frontend/src"),
        file("/frontend/src/App.js", app_js),
        file("/backend/server.js", server_js),
    ]


def basic_project(name: str) -> list[GeneratedNode]:
    readme = (
        f"# {name}\n"
        "\n"
        "A basic project generated from your prompt.\n"
        "\n"
        "## Getting Started\n"
        "\n"
        "This project structure has been created based on your requirements. "
        "Add your specific implementation details here.\n"
    )
    index_js = (
        f"// {name}\n"
        "// Generated from your prompt\n"
        "\n"
        f"console.log('Hello from {name}!');\n"
    )
    package = _manifest(
        {
            "name": package_identifier(name),
            "version": "1.0.0",
            "main": "src/index.js",
            "scripts": {"start": "node src/index.js"},
        }
    )
    return [
        file("/README.md", readme),
        folder("/src"),
        file("/src/index.js", index_js),
        file("/package.json", package),
    ]


TEMPLATES: dict[Archetype, Callable[[str], list[GeneratedNode]]] = {
    Archetype.FULL_STACK: full_stack_project,
    Archetype.API: api_project,
    Archetype.FRONTEND: frontend_project,
    Archetype.BASIC: basic_project,
}


def synthesize(archetype: Archetype, project_name: str) -> list[GeneratedNode]:
    return TEMPLATES[archetype](project_name)
