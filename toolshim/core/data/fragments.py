"""
Built-in fragment table — tools, install hints, and aliases.

Pure data, no logic. Each entry is validated into a ``Fragment`` by
``toolshim.core.services.registry.builtin_fragments``.

Alias ``args`` are prepended before whatever the user types, so
``gco main`` runs ``git checkout main``.
"""

from __future__ import annotations

BUILTIN_FRAGMENTS: list[dict] = [

    # ── Core: version control ───────────────────────────────────

    {
        "name": "git",
        "description": "Git shortcuts",
        "tier": "core",
        "tools": [
            {
                "name": "git",
                "install_hint": "brew install git | scoop install git | apt install git",
                "homepage": "https://git-scm.com",
            },
        ],
        "aliases": [
            {"name": "g",    "tool": "git", "args": [],                 "description": "git"},
            {"name": "gs",   "tool": "git", "args": ["status"],         "description": "Working tree status"},
            {"name": "gst",  "tool": "git", "args": ["status", "--short", "--branch"]},
            {"name": "ga",   "tool": "git", "args": ["add"]},
            {"name": "gaa",  "tool": "git", "args": ["add", "--all"]},
            {"name": "gc",   "tool": "git", "args": ["commit"]},
            {"name": "gcm",  "tool": "git", "args": ["commit", "-m"]},
            {"name": "gca",  "tool": "git", "args": ["commit", "--amend"]},
            {"name": "gco",  "tool": "git", "args": ["checkout"]},
            {"name": "gsw",  "tool": "git", "args": ["switch"]},
            {"name": "gb",   "tool": "git", "args": ["branch"]},
            {"name": "gd",   "tool": "git", "args": ["diff"]},
            {"name": "gds",  "tool": "git", "args": ["diff", "--staged"]},
            {"name": "gl",   "tool": "git", "args": ["pull"]},
            {"name": "gp",   "tool": "git", "args": ["push"]},
            {"name": "gpf",  "tool": "git", "args": ["push", "--force-with-lease"]},
            {"name": "gf",   "tool": "git", "args": ["fetch", "--all", "--prune"]},
            {"name": "glog", "tool": "git", "args": ["log", "--oneline", "--graph", "--decorate"]},
            {"name": "grb",  "tool": "git", "args": ["rebase"]},
            {"name": "gsta", "tool": "git", "args": ["stash", "push"]},
            {"name": "gstp", "tool": "git", "args": ["stash", "pop"]},
        ],
    },
    {
        "name": "github",
        "description": "GitHub CLI shortcuts",
        "tier": "standard",
        "requires": ["git"],
        "tools": [
            {
                "name": "gh",
                "install_hint": "brew install gh | scoop install gh | winget install GitHub.cli",
                "homepage": "https://cli.github.com",
            },
        ],
        "aliases": [
            {"name": "ghpr",  "tool": "gh", "args": ["pr"]},
            {"name": "ghprc", "tool": "gh", "args": ["pr", "create"]},
            {"name": "ghprv", "tool": "gh", "args": ["pr", "view", "--web"]},
            {"name": "ghrv",  "tool": "gh", "args": ["repo", "view", "--web"]},
            {"name": "ghrun", "tool": "gh", "args": ["run", "list"]},
        ],
    },

    # ── Essential: containers ───────────────────────────────────

    {
        "name": "docker",
        "description": "Container shortcuts (docker, falls back to podman)",
        "tier": "essential",
        "tools": [
            {
                "name": "docker",
                "alternatives": ["podman"],
                "install_hint": "Install Docker Desktop (https://docs.docker.com/get-docker/) or podman",
                "homepage": "https://www.docker.com",
            },
        ],
        "aliases": [
            {"name": "d",     "tool": "docker", "args": []},
            {"name": "dps",   "tool": "docker", "args": ["ps"]},
            {"name": "dpsa",  "tool": "docker", "args": ["ps", "-a"]},
            {"name": "di",    "tool": "docker", "args": ["images"]},
            {"name": "drun",  "tool": "docker", "args": ["run", "--rm", "-it"]},
            {"name": "dex",   "tool": "docker", "args": ["exec", "-it"]},
            {"name": "dlogs", "tool": "docker", "args": ["logs", "-f"]},
            {"name": "dc",    "tool": "docker", "args": ["compose"]},
            {"name": "dcu",   "tool": "docker", "args": ["compose", "up", "-d"]},
            {"name": "dcd",   "tool": "docker", "args": ["compose", "down"]},
            {"name": "dprune", "tool": "docker", "args": ["system", "prune", "-f"]},
        ],
    },
    {
        "name": "kubernetes",
        "description": "kubectl and helm shortcuts",
        "tier": "standard",
        "tools": [
            {
                "name": "kubectl",
                "install_hint": "brew install kubectl | scoop install kubectl",
                "homepage": "https://kubernetes.io/docs/reference/kubectl/",
            },
            {
                "name": "helm",
                "install_hint": "brew install helm | scoop install helm",
                "homepage": "https://helm.sh",
            },
        ],
        "aliases": [
            {"name": "k",     "tool": "kubectl", "args": []},
            {"name": "kg",    "tool": "kubectl", "args": ["get"]},
            {"name": "kgp",   "tool": "kubectl", "args": ["get", "pods"]},
            {"name": "kgs",   "tool": "kubectl", "args": ["get", "services"]},
            {"name": "kgd",   "tool": "kubectl", "args": ["get", "deployments"]},
            {"name": "kd",    "tool": "kubectl", "args": ["describe"]},
            {"name": "kl",    "tool": "kubectl", "args": ["logs", "-f"]},
            {"name": "kaf",   "tool": "kubectl", "args": ["apply", "-f"]},
            {"name": "kdel",  "tool": "kubectl", "args": ["delete"]},
            {"name": "kctx",  "tool": "kubectl", "args": ["config", "use-context"]},
            {"name": "kns",   "tool": "kubectl", "args": ["config", "set-context", "--current", "--namespace"]},
            {"name": "h",     "tool": "helm",    "args": []},
            {"name": "hls",   "tool": "helm",    "args": ["list"]},
            {"name": "hup",   "tool": "helm",    "args": ["upgrade", "--install"]},
        ],
    },

    # ── Standard: language toolchains ───────────────────────────

    {
        "name": "node",
        "description": "npm, pnpm and yarn shortcuts",
        "tier": "standard",
        "tools": [
            {
                "name": "npm",
                "install_hint": "Install Node.js (https://nodejs.org) or use: brew install node | scoop install nodejs",
                "homepage": "https://www.npmjs.com",
            },
            {
                "name": "pnpm",
                "install_hint": "npm install -g pnpm | corepack enable pnpm",
                "homepage": "https://pnpm.io",
            },
            {
                "name": "yarn",
                "install_hint": "npm install -g yarn | corepack enable yarn",
                "homepage": "https://yarnpkg.com",
            },
            {
                "name": "npx",
                "install_hint": "Ships with npm; install Node.js (https://nodejs.org)",
            },
        ],
        "aliases": [
            {"name": "ni",    "tool": "npm",  "args": ["install"]},
            {"name": "nid",   "tool": "npm",  "args": ["install", "--save-dev"]},
            {"name": "nr",    "tool": "npm",  "args": ["run"]},
            {"name": "nt",    "tool": "npm",  "args": ["test"]},
            {"name": "nx",    "tool": "npx",  "args": []},
            {"name": "pn",    "tool": "pnpm", "args": []},
            {"name": "pni",   "tool": "pnpm", "args": ["install"]},
            {"name": "pna",   "tool": "pnpm", "args": ["add"]},
            {"name": "pnr",   "tool": "pnpm", "args": ["run"]},
            {"name": "pnx",   "tool": "pnpm", "args": ["dlx"]},
            {"name": "y",     "tool": "yarn", "args": []},
            {"name": "ya",    "tool": "yarn", "args": ["add"]},
        ],
    },
    {
        "name": "python",
        "description": "pip and uv shortcuts",
        "tier": "standard",
        "tools": [
            {
                "name": "pip",
                "alternatives": ["pip3"],
                "install_hint": "python -m ensurepip --upgrade",
            },
            {
                "name": "uv",
                "install_hint": "pip install uv | brew install uv | scoop install uv",
                "homepage": "https://docs.astral.sh/uv/",
            },
        ],
        "aliases": [
            {"name": "pipi",  "tool": "pip", "args": ["install"]},
            {"name": "pipu",  "tool": "pip", "args": ["install", "--upgrade"]},
            {"name": "pipl",  "tool": "pip", "args": ["list"]},
            {"name": "uvr",   "tool": "uv",  "args": ["run"]},
            {"name": "uva",   "tool": "uv",  "args": ["add"]},
            {"name": "uvs",   "tool": "uv",  "args": ["sync"]},
            {"name": "uvx",   "tool": "uv",  "args": ["tool", "run"]},
        ],
    },
    {
        "name": "rust",
        "description": "cargo shortcuts",
        "tier": "optional",
        "tools": [
            {
                "name": "cargo",
                "install_hint": "Install rustup (https://rustup.rs)",
                "homepage": "https://doc.rust-lang.org/cargo/",
            },
        ],
        "aliases": [
            {"name": "cb",    "tool": "cargo", "args": ["build"]},
            {"name": "cr",    "tool": "cargo", "args": ["run"]},
            {"name": "ct",    "tool": "cargo", "args": ["test"]},
            {"name": "ccl",   "tool": "cargo", "args": ["clippy"]},
        ],
    },

    # ── Standard: cloud & infrastructure ────────────────────────

    {
        "name": "aws",
        "description": "AWS CLI shortcuts",
        "tier": "optional",
        "tools": [
            {
                "name": "aws",
                "install_hint": "brew install awscli | scoop install aws | https://aws.amazon.com/cli/",
                "homepage": "https://aws.amazon.com/cli/",
            },
        ],
        "aliases": [
            {"name": "awsid",  "tool": "aws", "args": ["sts", "get-caller-identity"]},
            {"name": "awss3",  "tool": "aws", "args": ["s3"]},
            {"name": "awsls",  "tool": "aws", "args": ["s3", "ls"]},
            {"name": "awssso", "tool": "aws", "args": ["sso", "login"]},
        ],
    },
    {
        "name": "terraform",
        "description": "Terraform shortcuts (falls back to OpenTofu)",
        "tier": "optional",
        "tools": [
            {
                "name": "terraform",
                "alternatives": ["tofu"],
                "install_hint": "brew install terraform | scoop install terraform | https://developer.hashicorp.com/terraform/install",
                "homepage": "https://www.terraform.io",
            },
        ],
        "aliases": [
            {"name": "tf",     "tool": "terraform", "args": []},
            {"name": "tfi",    "tool": "terraform", "args": ["init"]},
            {"name": "tfp",    "tool": "terraform", "args": ["plan"]},
            {"name": "tfa",    "tool": "terraform", "args": ["apply"]},
            {"name": "tfd",    "tool": "terraform", "args": ["destroy"]},
            {"name": "tff",    "tool": "terraform", "args": ["fmt", "-recursive"]},
            {"name": "tfv",    "tool": "terraform", "args": ["validate"]},
        ],
    },

    # ── Optional: local AI ──────────────────────────────────────

    {
        "name": "ollama",
        "description": "Ollama local model shortcuts",
        "tier": "optional",
        "tools": [
            {
                "name": "ollama",
                "install_hint": "brew install ollama | scoop install ollama | https://ollama.com/download",
                "homepage": "https://ollama.com",
            },
        ],
        "aliases": [
            {"name": "ol",     "tool": "ollama", "args": []},
            {"name": "olls",   "tool": "ollama", "args": ["list"]},
            {"name": "olrun",  "tool": "ollama", "args": ["run"]},
            {"name": "olpull", "tool": "ollama", "args": ["pull"]},
            {"name": "olps",   "tool": "ollama", "args": ["ps"]},
        ],
    },
]
