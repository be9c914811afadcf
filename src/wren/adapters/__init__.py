"""Host adapters — turn an environment's input into a ``HostRequest``.

    asgi        -- ASGI 3 application (HTTP servers)
    cli         -- first command-line argument is the path
    navigation  -- browser-style location and in-page navigation
    serverless  -- API Gateway proxy events

The core never inspects the environment itself; pick the adapter for
the host you are running in.
"""
