"""Hall of Shame and achievements cog for Pickleball Doubles Tracker Bot."""

import discord
from discord import app_commands
from discord.ext import commands
from typing import Optional

from engine import aggregate_all, build_leaderboard, build_player_bundle, build_shame_report
from exceptions import PlayerNotFoundError, TrackerException
from utils.helpers import create_error_embed, create_info_embed


class Shame(commands.Cog):
    """Cog for the Hall of Shame and badge listings."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="shame", description="View the Hall of Shame")
    async def shame(self, interaction: discord.Interaction) -> None:
        """Call out the worst records on the court."""
        config = self.bot.config
        try:
            snapshot = await self.bot.db.load_snapshot()
            entries = build_leaderboard(aggregate_all(snapshot).values(), snapshot)
            report = build_shame_report(
                entries,
                self.bot.shame_rules,
                min_games_for_worst_rate=config.min_games_for_worst_rate,
                losing_streak_threshold=config.losing_streak_threshold,
            )
        except TrackerException as e:
            await interaction.response.send_message(
                embed=create_error_embed("Hall of Shame Unavailable", e.user_message),
                ephemeral=True
            )
            return

        if not report:
            await interaction.response.send_message(
                embed=create_info_embed(
                    "Hall of Shame",
                    "No shame to report... yet."
                )
            )
            return

        embed = create_info_embed("Hall of Shame")

        # Group call-outs under their rule title
        sections: dict[str, list[str]] = {}
        for item in report:
            sections.setdefault(f"{item.emoji} {item.title}", []).append(item.message)

        for title, messages in sections.items():
            embed.add_field(name=title, value="\n".join(messages[:10]), inline=False)

        embed.set_footer(
            text=(
                f"Worst rate needs {config.min_games_for_worst_rate}+ games | "
                f"cold streak is {config.losing_streak_threshold}+ losses"
            )
        )

        await interaction.response.send_message(embed=embed)

    @app_commands.command(name="achievements", description="List every badge and who can earn it")
    @app_commands.describe(player="Show which badges this player has earned (optional)")
    async def achievements(
        self,
        interaction: discord.Interaction,
        player: Optional[discord.Member] = None
    ) -> None:
        """List all badges, marking the ones a player holds."""
        rules = self.bot.achievement_rules
        if not rules:
            await interaction.response.send_message(
                embed=create_info_embed("Achievements", "No achievements are configured.")
            )
            return

        earned: set[str] = set()
        title = "Achievements"
        if player:
            try:
                snapshot = await self.bot.db.load_snapshot()
                bundle = build_player_bundle(snapshot, str(player.id), rules, recent_limit=0)
            except PlayerNotFoundError:
                bundle = None
            except TrackerException as e:
                await interaction.response.send_message(
                    embed=create_error_embed("Bad Match Data", e.user_message),
                    ephemeral=True
                )
                return
            if bundle:
                earned = {a.key for a in bundle.achievements}
            title = f"Achievements for {player.display_name} ({len(earned)}/{len(rules)})"

        lines = []
        for rule in rules:
            badge = rule.badge
            mark = ""
            if player:
                mark = "✅ " if badge.key in earned else "⬜ "
            lines.append(f"{mark}{badge.emoji} **{badge.name}**: {badge.description}")

        embed = create_info_embed(title, "\n".join(lines))
        await interaction.response.send_message(embed=embed)


async def setup(bot: commands.Bot) -> None:
    """Set up the shame cog."""
    await bot.add_cog(Shame(bot))
