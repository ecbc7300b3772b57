# Services package.
#
#   lifecycle        : generic get/list/create/update/delete with the
#                      not-found precondition and sequence compensation
#   user_service     : User kind
#   question_service : Question kind
#   answer_service   : Answer kind
#
# Services are built per request from an AsyncSession
# (``XService.for_session(db)``) so that the router layer controls the
# transaction boundary via the ``get_db`` dependency.
