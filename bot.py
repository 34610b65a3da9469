"""Main bot entry point for Pickleball Doubles Tracker."""

import asyncio
import logging
from dotenv import load_dotenv
load_dotenv()

import discord
from discord import app_commands
from discord.ext import commands

from config import Config, EMBED_COLOR, SHAME_RULES
from database import Database
from engine import load_rules, validate_shame_rules
from utils import Colors, log

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("pickleball-bot")

COGS = (
    "cogs.match_logging",
    "cogs.players",
    "cogs.stats",
    "cogs.shame",
)


class TrackerBot(commands.Bot):
    """Pickleball Doubles Tracker Discord Bot."""

    def __init__(self, config: Config):
        intents = discord.Intents.default()
        intents.members = True

        super().__init__(
            command_prefix="!",
            intents=intents,
            help_command=None
        )

        self.config = config
        self.db = Database(config.database_path)
        # Fail at startup rather than on the first /stats
        self.achievement_rules = load_rules(config.achievements)
        self.shame_rules = validate_shame_rules(SHAME_RULES)

    async def setup_hook(self) -> None:
        """Called when the bot is starting up."""
        log("BOT", "setup_hook starting...", Colors.GREEN)
        await self.db.connect()
        log("BOT", "Database connected", Colors.GREEN)
        log("BOT", f"Loaded {len(self.achievement_rules)} achievement rule(s)", Colors.GREEN)

        for cog in COGS:
            await self.load_extension(cog)
            log("BOT", f"  Loaded {cog}", Colors.GREEN)

        log("BOT", "Syncing commands...", Colors.GREEN)
        await self.tree.sync()
        log("BOT", "Commands synced!", Colors.GREEN)

    async def on_ready(self) -> None:
        """Called when the bot is ready."""
        log("BOT", f"Logged in as {self.user} (ID: {self.user.id})", Colors.GREEN)
        log("BOT", f"Connected to {len(self.guilds)} guild(s)", Colors.GREEN)
        for guild in self.guilds:
            log("BOT", f"  - {guild.name} (ID: {guild.id})", Colors.GREEN)

    async def close(self) -> None:
        """Clean up on shutdown."""
        await self.db.close()
        await super().close()


@app_commands.command(name="help", description="Get help with Pickleball Tracker commands")
async def help_command(interaction: discord.Interaction) -> None:
    """Display help information about all commands."""
    embed = discord.Embed(
        title="Pickleball Doubles Tracker - Help",
        description="Track your doubles matches and stats with your friends!",
        color=EMBED_COLOR
    )

    embed.add_field(
        name="Matches",
        value=(
            "**/logmatch** - Record a match (winners, losers, optional score and date)\n"
            "**/recentmatches** `[count]` - View recent matches\n"
            "**/deletematch** `match_id` - Remove a mistaken match"
        ),
        inline=False
    )

    embed.add_field(
        name="Players",
        value=(
            "**/register** - Join the tracker\n"
            "**/editplayer** - Change your name, nickname or avatar\n"
            "**/players** - List everyone\n"
            "**/removeplayer** `@player` - Admins: remove a player"
        ),
        inline=False
    )

    embed.add_field(
        name="Statistics",
        value=(
            "**/leaderboard** `[min_games]` - Win rate standings\n"
            "**/stats** `@player` - Record, streak, partner, nemesis, badges\n"
            "**/headtohead** `@player1` `@player2` - Compare two players\n"
            "**/rivalries** - Most-played matchups"
        ),
        inline=False
    )

    embed.add_field(
        name="Fun",
        value=(
            "**/shame** - The Hall of Shame\n"
            "**/achievements** `[@player]` - Every badge up for grabs"
        ),
        inline=False
    )

    embed.set_footer(text="Keep it out of the kitchen!")

    await interaction.response.send_message(embed=embed)


async def main() -> None:
    """Main entry point."""
    config = Config.from_env()
    bot = TrackerBot(config)

    bot.tree.add_command(help_command)

    async with bot:
        await bot.start(config.discord_token)


if __name__ == "__main__":
    asyncio.run(main())
