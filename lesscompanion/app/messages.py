import logging
from collections import namedtuple

LEVELS = {
    'message': logging.INFO,
    'notice': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR
}


class Message(namedtuple('Message', ['text', 'level'])):
    pass


class MessageQueue:
    """
    Messages to show the user with the next response. Every enqueued message is logged as well.
    """
    def __init__(self, log):
        """
        :type log: logging.Logger
        """
        self.log = log
        self.messages = []
        """:type: list[Message]"""

    def enqueue(self, text, level='message'):
        """
        :param text: Message text.
        :type text: str
        :param level: One of 'message', 'notice', 'warning', or 'error'.
        :type level: str
        """
        if level not in LEVELS:
            raise ValueError('Unknown message level \'{}\''.format(level))
        self.messages.append(Message(text, level))
        self.log.log(LEVELS[level], text)

    def get(self, level=None):
        """
        :param level: Only return messages with this level.
        :type level: str | None
        :rtype: list[Message]
        """
        return [message for message in self.messages if level is None or message.level == level]

    def clear(self):
        """
        Remove and return all queued messages.

        :rtype: list[Message]
        """
        messages, self.messages = self.messages, []
        return messages
