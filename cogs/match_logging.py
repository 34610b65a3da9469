"""Match logging cog for Pickleball Doubles Tracker Bot."""

import discord
from discord import app_commands, ui
from discord.ext import commands
from typing import Optional

from exceptions import TrackerException
from utils import Colors, log
from utils.helpers import (
    create_error_embed,
    create_info_embed,
    create_success_embed,
    format_match_line,
    format_played_at,
    parse_played_at,
    truncate_string,
)


class UndoMatchView(ui.View):
    """Lets the recorder take back a match they just logged."""

    def __init__(self, match_id: str, recorded_by: int):
        super().__init__(timeout=300)
        self.match_id = match_id
        self.recorded_by = recorded_by

    @ui.button(label="Undo", style=discord.ButtonStyle.danger)
    async def undo(self, interaction: discord.Interaction, button: ui.Button) -> None:
        """Delete the match that was just recorded."""
        if interaction.user.id != self.recorded_by:
            await interaction.response.send_message(
                embed=create_error_embed(
                    "Not Yours",
                    "Only the person who logged this match can undo it."
                ),
                ephemeral=True
            )
            return

        db = interaction.client.db
        try:
            await db.delete_match(self.match_id)
        except TrackerException as e:
            await interaction.response.send_message(
                embed=create_error_embed("Undo Failed", e.user_message),
                ephemeral=True
            )
            return

        log("MATCH_LOG", f"Match {self.match_id} undone by {interaction.user}", Colors.YELLOW)
        await interaction.response.edit_message(
            content="Match removed.",
            embed=None,
            view=None
        )

    async def on_timeout(self) -> None:
        """Handle view timeout."""
        # Undo window closed, nothing to do
        pass


class MatchLogging(commands.Cog):
    """Cog for recording and correcting matches."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="logmatch", description="Record a doubles match result")
    @app_commands.describe(
        winner1="First player on the winning team",
        winner2="Second player on the winning team",
        loser1="First player on the losing team",
        loser2="Second player on the losing team",
        winner_score="Winning team's score (optional, give both or neither)",
        loser_score="Losing team's score (optional, give both or neither)",
        comment="Trash talk or match notes",
        played_at="When it was played, e.g. 2024-06-01 or 2024-06-01 18:30 (UTC, optional)"
    )
    async def log_match(
        self,
        interaction: discord.Interaction,
        winner1: discord.Member,
        winner2: discord.Member,
        loser1: discord.Member,
        loser2: discord.Member,
        winner_score: Optional[app_commands.Range[int, 0, 99]] = None,
        loser_score: Optional[app_commands.Range[int, 0, 99]] = None,
        comment: Optional[str] = None,
        played_at: Optional[str] = None
    ) -> None:
        """Validate and record a match, then register any new players."""
        log("MATCH_LOG", f"logmatch invoked by {interaction.user}", Colors.MAGENTA)
        log("MATCH_LOG", f"  winners: {winner1} & {winner2}", Colors.MAGENTA)
        log("MATCH_LOG", f"  losers: {loser1} & {loser2}", Colors.MAGENTA)
        log("MATCH_LOG", f"  score: {winner_score}-{loser_score}", Colors.MAGENTA)

        db = self.bot.db
        members = [winner1, winner2, loser1, loser2]

        try:
            match = await db.create_match(
                winner_ids=(str(winner1.id), str(winner2.id)),
                loser_ids=(str(loser1.id), str(loser2.id)),
                recorded_by=str(interaction.user.id),
                winner_score=winner_score,
                loser_score=loser_score,
                comment=truncate_string(comment or "", 200),
                played_at=parse_played_at(played_at) if played_at else None,
            )
        except TrackerException as e:
            log("MATCH_LOG", f"  ERROR: {e}", Colors.RED)
            await interaction.response.send_message(
                embed=create_error_embed("Invalid Match", e.user_message),
                ephemeral=True
            )
            return

        names = {}
        for member in members:
            player = await db.get_or_create_player(str(member.id), member.display_name)
            names[player.id] = player.name

        embed = create_success_embed(
            "Match Logged!",
            format_match_line(match, lambda pid: names.get(pid, pid))
        )
        if match.comment:
            embed.add_field(name="Comment", value=match.comment, inline=False)
        if played_at:
            embed.add_field(name="Played", value=format_played_at(match), inline=False)
        embed.set_footer(text=f"Match ID: {match.id}")

        view = UndoMatchView(match.id, interaction.user.id)
        await interaction.response.send_message(embed=embed, view=view)

    @app_commands.command(name="deletematch", description="Delete a recorded match")
    @app_commands.describe(match_id="The match ID shown under the match")
    async def delete_match(self, interaction: discord.Interaction, match_id: str) -> None:
        """Delete a match, for fixing mistakes."""
        log("MATCH_LOG", f"deletematch {match_id} invoked by {interaction.user}", Colors.MAGENTA)
        try:
            await self.bot.db.delete_match(match_id.strip())
        except TrackerException as e:
            await interaction.response.send_message(
                embed=create_error_embed("Delete Failed", e.user_message),
                ephemeral=True
            )
            return

        await interaction.response.send_message(
            embed=create_success_embed("Match Deleted", f"Match `{match_id}` has been removed.")
        )

    @app_commands.command(name="recentmatches", description="View recent matches")
    @app_commands.describe(count="Number of matches to show (default 5, max 10)")
    async def recent_matches(
        self,
        interaction: discord.Interaction,
        count: int = 5
    ) -> None:
        """Display recent matches."""
        count = max(1, min(count, 10))  # Clamp between 1 and 10

        try:
            snapshot = await self.bot.db.load_snapshot(limit=count)
        except TrackerException as e:
            await interaction.response.send_message(
                embed=create_error_embed("Bad Match Data", e.user_message),
                ephemeral=True
            )
            return

        if not snapshot.matches:
            await interaction.response.send_message(
                embed=create_info_embed(
                    "Recent Matches",
                    "No matches have been played yet!"
                )
            )
            return

        embed = create_info_embed(f"Last {len(snapshot.matches)} Match(es)")

        for match in snapshot.matches:
            value = format_match_line(match, snapshot.display_name)
            if match.comment:
                value += f"\n> {match.comment}"
            value += f"\nID: `{match.id}`"
            embed.add_field(
                name=format_played_at(match),
                value=value,
                inline=False
            )

        await interaction.response.send_message(embed=embed)


async def setup(bot: commands.Bot) -> None:
    """Set up the match logging cog."""
    await bot.add_cog(MatchLogging(bot))
