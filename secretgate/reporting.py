from typing import List, Dict, Any
from colorama import init, Fore, Style

from secretgate import __version__

init()

BANNER = r"""
  ____                     _    ____       _
 / ___|  ___  ___ _ __ ___| |_ / ___| __ _| |_ ___
 \___ \ / _ \/ __| '__/ _ \ __| |  _ / _` | __/ _ \
  ___) |  __/ (__| | |  __/ |_| |_| | (_| | ||  __/
 |____/ \___|\___|_|  \___|\__|\____|\__,_|\__\___|
"""

class ConsoleReporter:
    def print_banner(self, summary: Dict[str, Any]):
        print(f"{Fore.CYAN}{BANNER}{Style.RESET_ALL}")
        print(f"{Style.BRIGHT}   SECRETGATE v{__version__}{Style.RESET_ALL}\n")
        for key, value in summary.items():
            print(f"[*] {key.upper():<15} {value}")
        print(f"\n[*] Listening on http://{summary['host']}:{summary['port']}")
        print(f"{Fore.YELLOW}[!] Authentication is shared: one successful login unlocks /secret for every client.{Style.RESET_ALL}\n")

    def print_error(self, message: str):
        print(f"{Fore.RED}[!!!] FATAL: {message}{Style.RESET_ALL}")

    def print_probe_summary(self, target: str, results: List[Any]) -> bool:
        print(f"\n{Style.BRIGHT}=== PROBE REPORT: {target} ==={Style.RESET_ALL}\n")

        passed_count = 0
        for res in results:
            p_str = f"{Fore.GREEN}PASS{Style.RESET_ALL}" if res.passed else f"{Fore.RED}FAIL{Style.RESET_ALL}"
            print(f"[{p_str}] {res.name}")
            if res.details:
                color = "" if res.passed else Fore.YELLOW
                print(f"      {color}{res.details}{Style.RESET_ALL}")
            if res.passed:
                passed_count += 1

        total = len(results)
        print(f"\nPassed: {passed_count}/{total}")
        return passed_count == total
