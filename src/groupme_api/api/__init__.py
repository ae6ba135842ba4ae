"""GroupMe API module.

Components:
- client.py: GroupMeClient core client
- groups.py: Group operations
- members.py: Membership operations
- messages.py: Group messages, mentions and splitting
- direct_messages.py: Direct messages
- bots.py: Bot operations
- users.py: User account operations
- images.py: Image upload
"""

from .bots import GroupMeBotsMixin
from .client import GroupMeClient, create_groupme_client
from .direct_messages import GroupMeDirectMessagesMixin
from .groups import GroupMeGroupsMixin
from .images import GroupMeImagesMixin
from .members import GroupMeMembersMixin
from .messages import GroupMeMessagesMixin
from .users import GroupMeUsersMixin

__all__ = [
    # Main client
    "GroupMeClient",
    "create_groupme_client",
    # Mixins (for advanced usage)
    "GroupMeBotsMixin",
    "GroupMeDirectMessagesMixin",
    "GroupMeGroupsMixin",
    "GroupMeImagesMixin",
    "GroupMeMembersMixin",
    "GroupMeMessagesMixin",
    "GroupMeUsersMixin",
]
