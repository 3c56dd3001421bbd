"""
Capability checks for the radiology order form.

Views ask "can this user schedule?" instead of comparing role names, so the
form logic does not depend on how the host models users and roles. Capabilities
map onto Django permissions declared on RadiologyOrder.Meta.
"""

PLACE_ORDER_PERMISSION = 'radiology.place_radiology_order'
SCHEDULE_STUDY_PERMISSION = 'radiology.schedule_radiology_study'


class RadiologyAccess:

    def has_capability(self, user, permission):
        if user is None or not user.is_authenticated:
            return False
        return user.has_perm(permission)

    def can_place_order(self, user):
        """Referring physicians: new orders get them prefilled as orderer."""
        return self.has_capability(user, PLACE_ORDER_PERMISSION)

    def can_schedule(self, user):
        return self.has_capability(user, SCHEDULE_STUDY_PERMISSION)


radiology_access = RadiologyAccess()
