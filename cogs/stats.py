"""Statistics cog for Pickleball Doubles Tracker Bot."""

import discord
from discord import app_commands
from discord.ext import commands
from typing import Optional

from engine import (
    aggregate_all,
    build_leaderboard,
    build_player_bundle,
    build_rivalries,
    by_encounters,
    head_to_head,
)
from exceptions import PlayerNotFoundError, TrackerException
from utils import Colors, log
from utils.helpers import (
    create_error_embed,
    create_info_embed,
    format_head_to_head,
    format_leaderboard_row,
    format_match_line,
    format_player,
    format_relationships,
    format_rivalry_row,
    format_streak,
    format_win_rate,
)


class Stats(commands.Cog):
    """Cog for viewing statistics."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    async def _load_snapshot(self, interaction: discord.Interaction):
        """Load a snapshot, replying with an error embed if the data is bad."""
        try:
            return await self.bot.db.load_snapshot()
        except TrackerException as e:
            log("STATS", f"  ERROR loading snapshot: {e}", Colors.RED)
            await interaction.response.send_message(
                embed=create_error_embed("Bad Match Data", e.user_message),
                ephemeral=True
            )
            return None

    @app_commands.command(name="leaderboard", description="View the win rate leaderboard")
    @app_commands.describe(min_games="Only rank players with at least this many games")
    async def leaderboard(
        self,
        interaction: discord.Interaction,
        min_games: Optional[app_commands.Range[int, 0, 1000]] = None
    ) -> None:
        """Display the leaderboard sorted by win rate."""
        log("STATS", f"leaderboard command invoked by {interaction.user}", Colors.CYAN)
        snapshot = await self._load_snapshot(interaction)
        if snapshot is None:
            return

        if min_games is None:
            min_games = self.bot.config.leaderboard_min_games

        stats = aggregate_all(snapshot)
        entries = build_leaderboard(stats.values(), snapshot, min_games=min_games)
        log("STATS", f"leaderboard ranked {len(entries)} players", Colors.CYAN)

        if not entries:
            await interaction.response.send_message(
                embed=create_info_embed(
                    "Leaderboard",
                    "Nobody qualifies yet. Go play some pickleball!"
                )
            )
            return

        embed = create_info_embed("Pickleball Leaderboard")
        embed.description = "\n".join(
            format_leaderboard_row(rank, entry)
            for rank, entry in enumerate(entries[:15], 1)  # Top 15
        )

        footer = "Ranked by win rate, then games played"
        if min_games:
            footer += f" | min {min_games} games"
        embed.set_footer(text=footer)

        await interaction.response.send_message(embed=embed)

    @app_commands.command(name="stats", description="View a player's statistics")
    @app_commands.describe(player="The player to view stats for")
    async def stats(
        self,
        interaction: discord.Interaction,
        player: discord.Member
    ) -> None:
        """Display detailed stats for a specific player."""
        log("STATS", f"stats command invoked by {interaction.user} for {player}", Colors.CYAN)
        snapshot = await self._load_snapshot(interaction)
        if snapshot is None:
            return

        try:
            bundle = build_player_bundle(
                snapshot,
                str(player.id),
                self.bot.achievement_rules,
                recent_limit=self.bot.config.recent_match_count,
            )
        except PlayerNotFoundError:
            await interaction.response.send_message(
                embed=create_error_embed(
                    "Player Not Found",
                    f"{player.display_name} hasn't played any matches yet!"
                ),
                ephemeral=True
            )
            return

        p = bundle.player
        s = bundle.stats
        embed = create_info_embed(f"Stats for {p.name}")
        embed.description = format_player(p.name, p.avatar_emoji, p.nickname)

        embed.add_field(
            name="Overview",
            value=(
                f"**Games:** {s.total_games}\n"
                f"**Wins:** {s.wins}\n"
                f"**Losses:** {s.losses}\n"
                f"**Win Rate:** {format_win_rate(s.win_rate)}\n"
                f"**Streak:** {format_streak(s.streak)}"
            ),
            inline=True
        )

        relationships = format_relationships(bundle, snapshot.display_name)
        if relationships:
            embed.add_field(name="Relationships", value=relationships, inline=True)

        if bundle.achievements:
            embed.add_field(
                name="Achievements",
                value="\n".join(f"{a.emoji} **{a.name}**: {a.description}" for a in bundle.achievements),
                inline=False
            )

        if bundle.recent_matches:
            embed.add_field(
                name="Recent Matches",
                value="\n".join(
                    ("✅ " if m.won(p.id) else "❌ ") + format_match_line(m, snapshot.display_name)
                    for m in bundle.recent_matches
                )[:1024],
                inline=False
            )

        embed.set_thumbnail(url=player.display_avatar.url)

        await interaction.response.send_message(embed=embed)

    @app_commands.command(name="headtohead", description="Compare two players")
    @app_commands.describe(
        player1="First player",
        player2="Second player"
    )
    async def head_to_head(
        self,
        interaction: discord.Interaction,
        player1: discord.Member,
        player2: discord.Member
    ) -> None:
        """Display the record between two players when on opposite teams."""
        log("STATS", f"headtohead command invoked by {interaction.user}", Colors.GREEN)

        if player1.id == player2.id:
            await interaction.response.send_message(
                embed=create_error_embed(
                    "Invalid Comparison",
                    "You can't compare a player to themselves!"
                ),
                ephemeral=True
            )
            return

        snapshot = await self._load_snapshot(interaction)
        if snapshot is None:
            return

        rivalry = head_to_head(snapshot.matches, str(player1.id), str(player2.id))
        log("STATS", f"  h2h result: {rivalry}", Colors.GREEN)

        if rivalry is None:
            await interaction.response.send_message(
                embed=create_info_embed(
                    "Head to Head",
                    f"**{player1.display_name}** and **{player2.display_name}** "
                    "haven't played against each other yet!"
                )
            )
            return

        embed = create_info_embed("Head to Head")
        embed.description = format_head_to_head(rivalry, snapshot.display_name)

        await interaction.response.send_message(embed=embed)

    @app_commands.command(name="rivalries", description="View the most-played rivalries")
    async def rivalries(self, interaction: discord.Interaction) -> None:
        """Display head-to-head records for every pair that has faced off."""
        log("STATS", f"rivalries command invoked by {interaction.user}", Colors.CYAN)
        snapshot = await self._load_snapshot(interaction)
        if snapshot is None:
            return

        min_games = self.bot.config.rivalry_min_games
        rivalries = by_encounters(build_rivalries(snapshot.matches), min_games=min_games)

        if not rivalries:
            await interaction.response.send_message(
                embed=create_info_embed(
                    "Rivalries",
                    f"No pair has faced each other {min_games}+ times yet!"
                )
            )
            return

        embed = create_info_embed("Rivalries")
        embed.description = "\n".join(
            f"`{i}.` " + format_rivalry_row(r, snapshot.display_name)
            for i, r in enumerate(rivalries[:15], 1)
        )
        embed.set_footer(text=f"Pairs with at least {min_games} games on opposite sides")

        await interaction.response.send_message(embed=embed)


async def setup(bot: commands.Bot) -> None:
    """Set up the stats cog."""
    await bot.add_cog(Stats(bot))
