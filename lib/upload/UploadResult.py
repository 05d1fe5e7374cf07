from .UploadStates import UploadState

# What happened to one source file.
# state is the outcome (SKIPPED, CREATED, OVERWRITTEN or FAILED); states is the full path through the state machine.
class UploadResult(object):
	def __init__(this, src, dest):
		this.src = src
		this.dest = dest
		this.state = UploadState.START
		this.states = [UploadState.START]
		this.node = None
		this.existingPath = None # Set when the same content was found somewhere else.
		this.message = ""
		this.error = None

	def __repr__(this):
		return f"<UploadResult {this.src} -> {this.dest}: {this.state}>"

	@property
	def success(this):
		return this.state.IsOutcome()

	def Transition(this, state):
		if (this.IsFinished()):
			raise RuntimeError(f"Upload of {this.src} already finished as {this.state}")
		this.state = state
		this.states.append(state)

	def Finish(this, state, node, message, existingPath=None):
		if (not state.IsOutcome()):
			raise ValueError(f"{state} is not a successful outcome")
		this.Transition(state)
		this.node = node
		this.message = message
		this.existingPath = existingPath
		this.states.append(UploadState.DONE)

	def Fail(this, error):
		if (this.IsFinished()):
			return
		this.Transition(UploadState.FAILED)
		this.error = error
		this.message = f"Failed to upload {this.src}: {error}"

	def IsFinished(this):
		return this.states[-1] in (UploadState.DONE, UploadState.FAILED)

	def ToDict(this):
		return {
			'src': this.src,
			'dest': this.dest,
			'state': str(this.state),
			'message': this.message,
			'node': this.node.ToRemote() if this.node is not None else None,
			'existing_path': this.existingPath,
		}
