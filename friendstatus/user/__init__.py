"""
User service.

Keeps track of who is signed on, and lets signed-on users manage their friend
list and post status updates.
"""
