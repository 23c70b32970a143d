
"""Check that the required developer tools are installed and configured."""

import csv
import re
import subprocess
import sys
from importlib import metadata
from pathlib import Path
from typing import List, Optional, Sequence

CSV_FILENAME = "jira-tickets-import.csv"
REQUIRED_PACKAGES = ("requests",)

GH_LOGIN_PATTERN = re.compile(r"Logged in to github\.com (?:as|account) ([^\s]+)")


def run_command(args: List[str]) -> Optional[str]:
    try:
        result = subprocess.run(args, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True)
    except OSError:
        return None
    if result.returncode != 0:
        return None
    return result.stdout


def check_command(args: List[str], name: str) -> bool:
    output = run_command(args)
    if output:
        lines = output.strip().splitlines() or [""]
        print(f"✅ {name} is installed")
        print(f"   {lines[0]}")
        return True
    print(f"❌ {name} is NOT installed or not in PATH")
    return False


def parse_gh_user(auth_output: str) -> Optional[str]:
    match = GH_LOGIN_PATTERN.search(auth_output)
    return match.group(1) if match else None


def check_gh_auth() -> bool:
    auth_status = run_command(["gh", "auth", "status"])
    if auth_status and "Logged in" in auth_status:
        print("✅ GitHub CLI is authenticated")
        username = parse_gh_user(auth_status)
        if username:
            print(f"   User: {username}")
        return True

    print("❌ GitHub CLI is NOT authenticated")
    print("")
    print("To authenticate:")
    print("   gh auth login")
    return False


def count_csv_issues(csv_path: Path) -> int:
    with open(csv_path, newline='', encoding="utf-8", errors="replace") as csv_file:
        reader = csv.reader(csv_file)
        next(reader, None)
        return sum(1 for row in reader if row)


def check_csv_file(csv_path: Optional[Path] = None) -> bool:
    # resolved against the directory the report is run from
    if csv_path is None:
        csv_path = Path.cwd() / CSV_FILENAME
    if csv_path.exists():
        print(f"✅ CSV file exists ({count_csv_issues(csv_path)} issues)")
        return True
    print("❌ CSV file not found")
    return False


def missing_packages(packages: Sequence[str] = REQUIRED_PACKAGES) -> List[str]:
    missing = []
    for package in packages:
        try:
            metadata.version(package)
        except metadata.PackageNotFoundError:
            missing.append(package)
    return missing


def check_dependencies(packages: Sequence[str] = REQUIRED_PACKAGES) -> bool:
    missing = missing_packages(packages)
    if not missing:
        print("✅ Python dependencies installed")
        return True
    print(f"❌ Python dependencies NOT installed: {', '.join(missing)}")
    print("   Run: pip install -e .")
    return False


def print_path_help():
    print("⚠️  GitHub CLI is not accessible in your PATH")
    print("")
    print("Solutions:")
    print("1. RESTART your terminal (close and reopen)")
    print("2. If still not working, check installation:")
    print("   - Default path: C:\\Program Files\\GitHub CLI\\")
    print("   - Verify gh.exe exists there")
    print("3. Add to PATH manually if needed")
    print("")


def print_summary(gh_installed: bool, authenticated: bool):
    print("=" * 60)
    print("Summary")
    print("=" * 60)
    print("")

    if not gh_installed:
        print("⚠️  ACTION REQUIRED:")
        print("")
        print("1. CLOSE this terminal completely")
        print("2. OPEN a new terminal")
        print("3. Run this script again: verify-setup")
        print("")
        print("If GitHub CLI still not found:")
        print("- Check: C:\\Program Files\\GitHub CLI\\gh.exe")
        print("- Reinstall: winget install --id GitHub.cli")
    elif not authenticated:
        print("⚠️  ACTION REQUIRED:")
        print("")
        print("Authenticate GitHub CLI:")
        print("   gh auth login")
        print("")
    else:
        print("✅ All set! You can now:")
        print("")
        print("1. Apply branch protection rules:")
        print("   setup-branch-protection")
        print("")
        print("2. Verify the rules in the repository settings:")
        print("   gh browse --settings")
        print("")


def main() -> int:
    print("=" * 60)
    print("Setup Verification")
    print("=" * 60)
    print("")

    print("1. Checking Python...")
    check_command([sys.executable, "--version"], "Python")
    print("")

    print("2. Checking pip...")
    check_command([sys.executable, "-m", "pip", "--version"], "pip")
    print("")

    print("3. Checking Git...")
    check_command(["git", "--version"], "Git")
    print("")

    print("4. Checking GitHub CLI...")
    gh_installed = check_command(["gh", "--version"], "GitHub CLI")
    print("")

    authenticated = False
    if not gh_installed:
        print_path_help()
    else:
        print("5. Checking GitHub authentication...")
        authenticated = check_gh_auth()
        print("")

    print("6. Checking CSV file...")
    check_csv_file()
    print("")

    print("7. Checking Python dependencies...")
    check_dependencies()
    print("")

    print_summary(gh_installed, authenticated)
    return 0


if __name__ == "__main__":
    sys.exit(main())
