"""Built-in tool definitions and category assignments.

The dictionary follows the .devtoolkit.yml schema and is the lowest layer
of configuration; user config is merged on top of it.
"""

from typing import Any, Dict

_UNINSTALL = r"HKLM\SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall"
_UNINSTALL_WOW = r"HKLM\SOFTWARE\WOW6432Node\Microsoft\Windows\CurrentVersion\Uninstall"
_UNINSTALL_USER = r"HKCU\SOFTWARE\Microsoft\Windows\CurrentVersion\Uninstall"

BUILTIN_TOOLS: Dict[str, Dict[str, Any]] = {
    # Package managers
    "winget": {
        "executable_names": ["winget"],
        "version_commands": ["winget --version"],
        "test_commands": [
            {"command": "winget --help", "expected_output": "winget"},
            {"command": "winget source list", "expected_output": "winget"},
        ],
        "common_paths": ["%LOCALAPPDATA%/Microsoft/WindowsApps/winget.exe"],
    },
    "choco": {
        "executable_names": ["choco"],
        "version_commands": ["choco --version"],
        "test_commands": [
            {"command": "choco --help", "expected_output": "Chocolatey"},
            {"command": "choco list --local-only", "expected_output": "packages"},
        ],
        "common_paths": ["%ProgramData%/chocolatey/bin", "%ChocolateyInstall%/bin"],
        "packages": {"winget": "Chocolatey.Chocolatey"},
    },
    "scoop": {
        "executable_names": ["scoop"],
        "version_commands": ["scoop --version"],
        "test_commands": [{"command": "scoop help", "expected_output": "Usage"}],
        "common_paths": ["%USERPROFILE%/scoop/shims", "%SCOOP%/shims"],
    },
    "brew": {
        "executable_names": ["brew"],
        "version_commands": ["brew --version"],
        "test_commands": [{"command": "brew config", "expected_output": "HOMEBREW_VERSION"}],
        "common_paths": ["/opt/homebrew/bin", "/home/linuxbrew/.linuxbrew/bin", "/usr/local/Homebrew/bin"],
    },

    # Development tools
    "git": {
        "executable_names": ["git"],
        "version_commands": ["git --version"],
        "test_commands": [
            {"command": "git --help", "expected_output": "usage: git"},
            {"command": "git config --list", "expected_output": None},
            {"command": "git --exec-path"},
        ],
        "common_paths": ["%ProgramFiles%/Git/cmd", "%ProgramFiles%/Git/bin", "/usr/local/git/bin"],
        "registry_keys": [f"{_UNINSTALL}\\Git_is1", "dpkg:git", "rpm:git", "brew:git"],
        "packages": {"winget": "Git.Git", "choco": "git", "scoop": "git", "brew": "git", "apt-get": "git", "dnf": "git"},
    },
    "node": {
        "executable_names": ["node"],
        "version_commands": ["node --version"],
        "test_commands": [
            {"command": "node -e \"console.log('ok')\"", "expected_output": "^ok"},
            {"command": "npm --version", "expected_output": r"\d+\.\d+"},
        ],
        "common_paths": ["%ProgramFiles%/nodejs", "%APPDATA%/nvm/*", "~/.nvm/versions/node/*/bin"],
        "registry_keys": ["dpkg:nodejs", "rpm:nodejs", "brew:node"],
        "packages": {"winget": "OpenJS.NodeJS.LTS", "choco": "nodejs-lts", "scoop": "nodejs-lts", "brew": "node", "apt-get": "nodejs", "dnf": "nodejs"},
    },
    "python": {
        "executable_names": ["python3", "python", "py"],
        "version_commands": ["python3 --version", "python --version", "py --version"],
        "test_commands": [
            {"command": "python3 -c \"print('ok')\"", "expected_output": "^ok"},
            {"command": "python3 -m pip --version", "expected_output": "pip"},
        ],
        "common_paths": ["%LOCALAPPDATA%/Programs/Python/Python3*", "%ProgramFiles%/Python3*"],
        "registry_keys": ["dpkg:python3", "rpm:python3", "brew:python"],
        "packages": {"winget": "Python.Python.3.12", "choco": "python", "scoop": "python", "brew": "python", "apt-get": "python3", "dnf": "python3"},
    },
    "dotnet": {
        "executable_names": ["dotnet"],
        "version_commands": ["dotnet --version"],
        "test_commands": [
            {"command": "dotnet --info", "expected_output": ".NET"},
            {"command": "dotnet --list-sdks", "expected_output": r"\d+\.\d+"},
        ],
        "common_paths": ["%ProgramFiles%/dotnet", "/usr/share/dotnet", "/usr/local/share/dotnet"],
        "packages": {"winget": "Microsoft.DotNet.SDK.8", "choco": "dotnet-sdk", "brew": "dotnet", "apt-get": "dotnet-sdk-8.0"},
    },
    "go": {
        "executable_names": ["go"],
        "version_commands": ["go version"],
        "test_commands": [
            {"command": "go env GOROOT"},
            {"command": "go help", "expected_output": "Go is a tool"},
        ],
        "common_paths": ["%ProgramFiles%/Go/bin", "/usr/local/go/bin"],
        "registry_keys": ["dpkg:golang-go", "rpm:golang", "brew:go"],
        "packages": {"winget": "GoLang.Go", "choco": "golang", "scoop": "go", "brew": "go", "apt-get": "golang-go", "dnf": "golang"},
    },
    "docker": {
        "executable_names": ["docker"],
        "version_commands": ["docker --version"],
        "test_commands": [
            {"command": "docker --help", "expected_output": "Usage"},
            {"command": "docker info", "expected_output": "Server"},
        ],
        "common_paths": ["%ProgramFiles%/Docker/Docker/resources/bin", "/Applications/Docker.app/Contents/Resources/bin"],
        "registry_keys": [f"{_UNINSTALL}\\Docker Desktop", "dpkg:docker-ce", "rpm:docker-ce"],
        "packages": {"winget": "Docker.DockerDesktop", "choco": "docker-desktop", "brew": "docker", "apt-get": "docker.io", "dnf": "docker"},
    },

    # Cloud tools
    "azure-cli": {
        "executable_names": ["az"],
        "version_commands": ["az version --output tsv", "az --version"],
        "test_commands": [
            {"command": "az --help", "expected_output": "Group"},
            {"command": "az account list-locations --help", "expected_output": "Command"},
        ],
        "common_paths": ["%ProgramFiles%/Microsoft SDKs/Azure/CLI2/wbin", "%ProgramFiles(x86)%/Microsoft SDKs/Azure/CLI2/wbin"],
        "registry_keys": ["dpkg:azure-cli", "rpm:azure-cli", "brew:azure-cli"],
        "packages": {"winget": "Microsoft.AzureCLI", "choco": "azure-cli", "brew": "azure-cli", "apt-get": "azure-cli", "dnf": "azure-cli"},
    },
    "aws-cli": {
        "executable_names": ["aws"],
        "version_commands": ["aws --version"],
        "test_commands": [
            {"command": "aws help", "expected_output": "aws"},
            {"command": "aws configure list", "expected_output": "profile"},
        ],
        "common_paths": ["%ProgramFiles%/Amazon/AWSCLIV2", "/usr/local/aws-cli/v2/current/bin"],
        "registry_keys": ["brew:awscli"],
        "packages": {"winget": "Amazon.AWSCLI", "choco": "awscli", "scoop": "aws", "brew": "awscli"},
    },
    "gcloud": {
        "executable_names": ["gcloud"],
        "version_commands": ["gcloud --version"],
        "test_commands": [{"command": "gcloud help", "expected_output": "gcloud"}],
        "common_paths": [
            "%LOCALAPPDATA%/Google/Cloud SDK/google-cloud-sdk/bin",
            "%ProgramFiles(x86)%/Google/Cloud SDK/google-cloud-sdk/bin",
            "~/google-cloud-sdk/bin",
        ],
        "registry_keys": ["dpkg:google-cloud-cli", "rpm:google-cloud-cli"],
        "packages": {"winget": "Google.CloudSDK", "choco": "gcloudsdk", "scoop": "gcloud", "brew": "google-cloud-sdk", "apt-get": "google-cloud-cli", "dnf": "google-cloud-cli"},
    },
    "terraform": {
        "executable_names": ["terraform"],
        "version_commands": ["terraform version", "terraform --version"],
        "test_commands": [
            {"command": "terraform -help", "expected_output": "Usage"},
            {"command": "terraform version", "expected_output": "Terraform"},
        ],
        "common_paths": ["%ProgramFiles%/Terraform", "/usr/local/bin/terraform"],
        "registry_keys": ["dpkg:terraform", "rpm:terraform", "brew:terraform"],
        "packages": {"winget": "Hashicorp.Terraform", "choco": "terraform", "scoop": "terraform", "brew": "terraform", "apt-get": "terraform", "dnf": "terraform"},
    },
    "kubectl": {
        "executable_names": ["kubectl"],
        "version_commands": ["kubectl version --client"],
        "test_commands": [
            {"command": "kubectl help", "expected_output": "kubectl"},
            {"command": "kubectl config view", "expected_output": "apiVersion"},
        ],
        "common_paths": ["%USERPROFILE%/.kube/bin", "/usr/local/bin/kubectl"],
        "registry_keys": ["dpkg:kubectl", "brew:kubernetes-cli"],
        "packages": {"winget": "Kubernetes.kubectl", "choco": "kubernetes-cli", "scoop": "kubectl", "brew": "kubernetes-cli", "apt-get": "kubectl"},
    },

    # Applications
    "vscode": {
        "executable_names": ["code"],
        "version_commands": ["code --version"],
        "test_commands": [
            {"command": "code --help", "expected_output": "Visual Studio Code"},
            {"command": "code --list-extensions"},
        ],
        "common_paths": [
            "%LOCALAPPDATA%/Programs/Microsoft VS Code/bin",
            "%ProgramFiles%/Microsoft VS Code/bin",
            "/Applications/Visual Studio Code.app/Contents/Resources/app/bin",
        ],
        "registry_keys": [
            f"{_UNINSTALL_USER}\\{{771FD6B0-FA20-440A-A002-3B3BAC16DC50}}_is1",
            f"{_UNINSTALL}\\{{EA457B21-F73E-494C-ACAB-524FDE069978}}_is1",
            "dpkg:code",
            "rpm:code",
        ],
        "packages": {"winget": "Microsoft.VisualStudioCode", "choco": "vscode", "scoop": "vscode", "brew": "visual-studio-code", "apt-get": "code", "dnf": "code"},
    },
    "windows-terminal": {
        "executable_names": ["wt"],
        "version_commands": [],
        "test_commands": [],
        "common_paths": ["%LOCALAPPDATA%/Microsoft/WindowsApps/wt.exe"],
        "packages": {"winget": "Microsoft.WindowsTerminal", "choco": "microsoft-windows-terminal", "scoop": "windows-terminal"},
    },
    "powershell": {
        "executable_names": ["pwsh"],
        "version_commands": ["pwsh -NoLogo -NoProfile -Command $PSVersionTable.PSVersion.ToString()", "pwsh --version"],
        "test_commands": [
            {"command": "pwsh -NoLogo -NoProfile -Command Write-Output ok", "expected_output": "^ok"},
        ],
        "common_paths": ["%ProgramFiles%/PowerShell/7", "/usr/local/microsoft/powershell/7", "/opt/microsoft/powershell/7"],
        "registry_keys": ["dpkg:powershell", "rpm:powershell", "brew:powershell"],
        "packages": {"winget": "Microsoft.PowerShell", "choco": "powershell-core", "scoop": "pwsh", "brew": "powershell", "apt-get": "powershell", "dnf": "powershell"},
    },
    "7zip": {
        "executable_names": ["7z", "7zz"],
        "version_commands": [],
        "test_commands": [{"command": "7z i", "expected_output": "7-Zip"}],
        "common_paths": ["%ProgramFiles%/7-Zip", "%ProgramFiles(x86)%/7-Zip"],
        "registry_keys": [f"{_UNINSTALL}\\7-Zip", f"{_UNINSTALL_WOW}\\7-Zip", "dpkg:7zip", "dpkg:p7zip-full", "brew:sevenzip"],
        "packages": {"winget": "7zip.7zip", "choco": "7zip", "scoop": "7zip", "brew": "sevenzip", "apt-get": "7zip", "dnf": "p7zip"},
    },

    # AI tools
    "ollama": {
        "executable_names": ["ollama"],
        "version_commands": ["ollama --version"],
        "test_commands": [
            {"command": "ollama --help", "expected_output": "Usage"},
            {"command": "ollama list", "expected_output": "NAME"},
        ],
        "common_paths": ["%LOCALAPPDATA%/Programs/Ollama", "/usr/local/bin/ollama", "/Applications/Ollama.app/Contents/Resources"],
        "registry_keys": [f"{_UNINSTALL_USER}\\{{44E83376-CE68-45EB-8FC1-393500EB558C}}_is1", "brew:ollama"],
        "packages": {"winget": "Ollama.Ollama", "scoop": "ollama", "brew": "ollama"},
    },
    "aider": {
        "executable_names": ["aider"],
        "version_commands": ["aider --version"],
        "test_commands": [{"command": "aider --help", "expected_output": "usage: aider"}],
        "common_paths": ["~/.local/bin/aider", "%USERPROFILE%/.local/bin/aider.exe"],
        "packages": {"brew": "aider"},
    },
    "huggingface-cli": {
        "executable_names": ["huggingface-cli"],
        "version_commands": ["huggingface-cli version", "huggingface-cli env"],
        "test_commands": [{"command": "huggingface-cli --help", "expected_output": "usage"}],
        "common_paths": ["~/.local/bin/huggingface-cli"],
        "packages": {"brew": "huggingface-cli"},
    },
}

BUILTIN_CATEGORIES: Dict[str, Any] = {
    "package-managers": ["winget", "choco", "scoop", "brew"],
    "development-tools": ["git", "node", "python", "dotnet", "go", "docker"],
    "cloud-tools": ["azure-cli", "aws-cli", "gcloud", "terraform", "kubectl"],
    "applications": ["vscode", "windows-terminal", "powershell", "7zip"],
    "ai-tools": ["ollama", "aider", "huggingface-cli"],
}

BUILTIN_CONFIG: Dict[str, Any] = {
    "version": 1,
    "verification": {
        "threshold": 0.7,
        "timeout": 30,
        "install_timeout": 1800,
        "max_workers": 4,
        "sequential": False,
        "version_lines": 1,
    },
    "preconditions": {
        "supported_os": ["darwin", "linux", "windows"],
        "min_python": "3.9",
        "require_admin": False,
        "require_package_manager": False,
    },
    "logging": {"file": False},
    "package_managers": ["winget", "choco", "scoop", "brew", "apt-get", "dnf"],
    "categories": BUILTIN_CATEGORIES,
    "tools": BUILTIN_TOOLS,
    "configure": {
        "terminal": [],
        "powershell": [],
        "tools": [],
        "ai-tools": [],
    },
}
