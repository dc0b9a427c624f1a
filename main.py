from interhook.models import ApplicationCommandInteraction
from interhook import Client, Env, serve


def main() -> None:
    from interhook.otel import init_otel
    from interhook import VERSION

    env = Env.new()

    init_otel('interhook', VERSION, env.dev)

    client = Client.from_env(env)

    @client.slash_command('ping', 'check the latency of the bot')
    async def slash_ping(
        client: Client,
        interaction: ApplicationCommandInteraction
    ) -> None:
        await client.send_reply(
            interaction,
            {'content': f'pong! ({await client.ping()}ms)'},
            ephemeral=True
        )

    serve(
        client,
        env.interaction_path,
        env.port,
        env.host,
        env.ack_first
    )


if __name__ == '__main__':
    main()
