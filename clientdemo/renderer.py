from rich.console import Console
from rich.table import Table


class Renderer:
    """
    Renders repository details and recent commits to the console.
    """
    def __init__(self, console=None):
        """Initialize the renderer with a rich console."""
        self.console = console or Console()

    def render(self, repo):
        """
        Print a RepoData as a summary table followed by its recent commits.

        Args:
            repo (RepoData): The repository to display.
        """
        summary = Table(show_header=False, box=None)
        summary.add_column("Field", style="bold")
        summary.add_column("Value", style="cyan")
        summary.add_row("Repository Name:", repo.name)
        summary.add_row("Repository owner/organization:", repo.owner)
        summary.add_row("Description:", repo.description or "")
        summary.add_row("Created at:", repo.created_at.isoformat() if repo.created_at else "")
        summary.add_row("Primary language:", repo.primary_language or "")
        summary.add_row("Disk usage (K):", "" if repo.disk_usage is None else str(repo.disk_usage))
        summary.add_row("Is Private:", str(repo.is_private))
        self.console.print(summary)

        if not repo.recent_commits:
            self.console.print("[yellow]No recent commits found.[/yellow]")
            return

        commits = Table(show_header=True, header_style="bold magenta", title="Most recent commits")
        commits.add_column("Committed", style="yellow")
        commits.add_column("Headline", no_wrap=False)
        for c in repo.recent_commits:
            # RFC 1123 style, e.g. Sat, 01 Jun 2019 19:07:06 UTC
            when = c.committed_at.strftime("%a, %d %b %Y %H:%M:%S %Z") if c.committed_at else ""
            commits.add_row(when, c.headline)
        self.console.print(commits)
