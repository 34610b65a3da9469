"""Player directory cog for Pickleball Doubles Tracker Bot."""

import discord
from discord import app_commands
from discord.ext import commands
from typing import Optional

from config import DEFAULT_AVATAR
from exceptions import TrackerException
from utils import Colors, log
from utils.helpers import (
    create_error_embed,
    create_info_embed,
    create_success_embed,
    format_player,
)


class Players(commands.Cog):
    """Cog for registering and editing players."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="register", description="Join the pickleball tracker")
    @app_commands.describe(
        nickname="A fun alias (optional)",
        avatar="An emoji to use as your avatar (optional)"
    )
    async def register(
        self,
        interaction: discord.Interaction,
        nickname: Optional[str] = None,
        avatar: Optional[str] = None
    ) -> None:
        """Register the calling user as a player."""
        log("PLAYERS", f"register invoked by {interaction.user}", Colors.CYAN)
        try:
            player = await self.bot.db.create_player(
                str(interaction.user.id),
                interaction.user.display_name,
                nickname=nickname or "",
                avatar_emoji=avatar or DEFAULT_AVATAR,
            )
        except TrackerException as e:
            await interaction.response.send_message(
                embed=create_error_embed("Registration Failed", e.user_message),
                ephemeral=True
            )
            return

        await interaction.response.send_message(
            embed=create_success_embed(
                "Welcome to the Court!",
                f"{format_player(player.name, player.avatar_emoji, player.nickname)} is ready to play."
            )
        )

    @app_commands.command(name="editplayer", description="Change your name, nickname or avatar")
    @app_commands.describe(
        name="New display name",
        nickname="New nickname (send a single space to clear it)",
        avatar="New avatar emoji"
    )
    async def edit_player(
        self,
        interaction: discord.Interaction,
        name: Optional[app_commands.Range[str, 1, 32]] = None,
        nickname: Optional[app_commands.Range[str, 1, 50]] = None,
        avatar: Optional[app_commands.Range[str, 1, 8]] = None
    ) -> None:
        """Edit the calling user's player profile."""
        log("PLAYERS", f"editplayer invoked by {interaction.user}", Colors.CYAN)
        if name is None and nickname is None and avatar is None:
            await interaction.response.send_message(
                embed=create_error_embed("Nothing to Change", "Give at least one field to update."),
                ephemeral=True
            )
            return

        try:
            player = await self.bot.db.update_player(
                str(interaction.user.id),
                name=name,
                nickname=nickname,
                avatar_emoji=avatar,
            )
        except TrackerException as e:
            await interaction.response.send_message(
                embed=create_error_embed("Update Failed", e.user_message),
                ephemeral=True
            )
            return

        await interaction.response.send_message(
            embed=create_success_embed(
                "Profile Updated",
                format_player(player.name, player.avatar_emoji, player.nickname)
            ),
            ephemeral=True
        )

    @app_commands.command(name="removeplayer", description="Remove a player from the directory")
    @app_commands.describe(player="The player to remove (their matches are kept)")
    @app_commands.default_permissions(manage_guild=True)
    async def remove_player(
        self,
        interaction: discord.Interaction,
        player: discord.Member
    ) -> None:
        """Delete a player entry. Their matches stay and show the raw id."""
        log("PLAYERS", f"removeplayer {player} invoked by {interaction.user}", Colors.YELLOW)
        try:
            await self.bot.db.delete_player(str(player.id))
        except TrackerException as e:
            await interaction.response.send_message(
                embed=create_error_embed("Remove Failed", e.user_message),
                ephemeral=True
            )
            return

        await interaction.response.send_message(
            embed=create_success_embed(
                "Player Removed",
                f"**{player.display_name}** has been removed. Their matches are still counted."
            ),
            ephemeral=True
        )

    @app_commands.command(name="players", description="List all registered players")
    async def list_players(self, interaction: discord.Interaction) -> None:
        """List all registered players."""
        players = await self.bot.db.list_players()

        if not players:
            await interaction.response.send_message(
                embed=create_info_embed(
                    "Players",
                    "Nobody has registered yet! Use /register or log a match."
                )
            )
            return

        embed = create_info_embed("Players")
        embed.description = "\n".join(
            f"- {format_player(p.name, p.avatar_emoji, p.nickname)}" for p in players
        )
        embed.set_footer(text=f"{len(players)} player(s)")

        await interaction.response.send_message(embed=embed)


async def setup(bot: commands.Bot) -> None:
    """Set up the players cog."""
    await bot.add_cog(Players(bot))
