"""
Terminal colors and console helpers for the launch / fee tools
"""


class C:
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    CYAN = '\033[96m'
    MAGENTA = '\033[95m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    END = '\033[0m'


def banner(title: str):
    print("\n" + "=" * 60)
    print(f"{C.BOLD}{title}{C.END}")
    print("=" * 60)


def step(name: str, message: str):
    print(f"\n{C.CYAN}🔹 [{name}]{C.END} {message}")


def success(message: str):
    print(f"\n{C.GREEN}✅ {message}{C.END}")


def warn(message: str):
    print(f"\n{C.YELLOW}⚠️  {message}{C.END}")


def info(message: str):
    print(f"   {message}")
