from .maze_client import LocalMazeClient, MazeClient, MazeClientError, TransportError

__all__ = ["LocalMazeClient", "MazeClient", "MazeClientError", "TransportError"]
